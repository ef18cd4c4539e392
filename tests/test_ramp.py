import mido
import pytest

import conftest
import strumline
import strumline.errors
import strumline.ramp


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("name", sorted(strumline.ramp.SHAPES))
def test_shape_endpoints (name: str) -> None:

	"""Every shape starts at 0 and ends at 1."""

	fn = strumline.ramp.get_shape(name)

	assert fn(0.0) == pytest.approx(0.0)
	assert fn(1.0) == pytest.approx(1.0)


def test_shape_midpoints () -> None:

	"""ease_in lags linear, ease_out leads it, ease_in_out meets it halfway."""

	assert strumline.ramp.ease_in(0.5) < strumline.ramp.linear(0.5) < strumline.ramp.ease_out(0.5)
	assert strumline.ramp.ease_in_out(0.5) == pytest.approx(0.5)


def test_unknown_shape () -> None:

	"""An unknown shape name lists the available ones."""

	with pytest.raises(strumline.errors.ConfigurationError, match="ease_in_out"):
		strumline.ramp.get_shape("wobble")


def test_callable_shape () -> None:

	"""A callable is used as the easing function as-is."""

	def step (t: float) -> float:
		return 1.0 if t >= 0.5 else 0.0

	assert strumline.ramp.get_shape(step) is step


# ---------------------------------------------------------------------------
# Volume ramps
# ---------------------------------------------------------------------------

def test_volume_ramp_interpolates_and_holds () -> None:

	"""The volume moves along the ramp, then stays at the end value."""

	tracker = strumline.ramp.RampTracker(bpm=100)
	tracker.start_volume_ramp(0.6, start_tick=0, length_ticks=1536)

	assert tracker.volume_at(-10) == 1.0
	assert tracker.volume_at(768) == pytest.approx(0.8)
	assert tracker.volume_at(1536) == pytest.approx(0.6)
	assert tracker.ramp is None
	assert tracker.volume_at(5000) == pytest.approx(0.6)


def test_new_volume_ramp_replaces_old () -> None:

	"""Starting a ramp discards any ramp in progress."""

	tracker = strumline.ramp.RampTracker(bpm=100)
	tracker.start_volume_ramp(2.0, start_tick=0, length_ticks=768)
	tracker.start_volume_ramp(0.5, start_tick=0, length_ticks=768)

	assert tracker.volume_at(768) == pytest.approx(0.5)


def test_volume_ramp_arguments () -> None:

	"""Negative factors and empty ramps are rejected."""

	tracker = strumline.ramp.RampTracker(bpm=100)

	with pytest.raises(strumline.errors.ConfigurationError):
		tracker.start_volume_ramp(-1, start_tick=0, length_ticks=768)

	with pytest.raises(strumline.errors.ConfigurationError):
		tracker.start_volume_ramp(0.5, start_tick=0, length_ticks=0)


def test_cresc_on_instrument (guitar: strumline.Instrument) -> None:

	"""A two-measure decrescendo to 0.6, starting a beat before the clock."""

	guitar.cresc(0.6, 2)
	guitar.play(guitar.pluck("1 1:100"), "0 0 0 0 0 0", "0 0 0 0 0 0", "0 0 0 0 0 0", "0 0 0 0 0 0")

	assert [velocity for _, _, velocity in conftest.note_events(guitar)] == [95, 75, 60, 60]
	assert guitar.volume == pytest.approx(0.6)


def test_decresc_is_cresc (guitar: strumline.Instrument) -> None:

	"""decresc is another name for cresc."""

	assert strumline.Instrument.decresc is strumline.Instrument.cresc


def test_cresc_needs_a_measure (guitar: strumline.Instrument) -> None:

	"""A ramp lasts at least one measure."""

	with pytest.raises(strumline.errors.ConfigurationError):
		guitar.cresc(1.2, 0)


# ---------------------------------------------------------------------------
# Tempo
# ---------------------------------------------------------------------------

def test_tempo_change_is_queued (guitar: strumline.Instrument) -> None:

	"""tempo() queues a change at the clock and updates the current tempo."""

	guitar.play()
	guitar.tempo(120)

	assert [(c.tick, c.microseconds_per_beat) for c in guitar.ramps.tempo_changes] == [(768, 500000)]
	assert guitar.bpm == 120


def test_rit_staircase (guitar: strumline.Instrument) -> None:

	"""A one-measure ritardando to half speed in 4/4 is four changes, one per beat."""

	guitar.rit(0.5, 1)

	changes = [(c.tick, c.microseconds_per_beat) for c in guitar.ramps.tempo_changes]

	assert changes == [
		(0, mido.bpm2tempo(87.5)),
		(192, mido.bpm2tempo(75)),
		(384, mido.bpm2tempo(62.5)),
		(576, mido.bpm2tempo(50)),
	]
	assert guitar.bpm == 50


def test_accel_staircase () -> None:

	"""An accelerando over two measures of 3/4 makes six steps up to the target."""

	guitar = strumline.Instrument(signature="3/4", bpm=90)
	guitar.accel(2, 2)

	changes = guitar.ramps.tempo_changes

	assert len(changes) == 6
	assert [c.tick for c in changes] == [0, 192, 384, 576, 768, 960]
	assert changes[-1].microseconds_per_beat == mido.bpm2tempo(180)
	assert all(a.microseconds_per_beat > b.microseconds_per_beat for a, b in zip(changes, changes[1:]))


def test_rit_shape () -> None:

	"""An eased ritardando moves less on its first step."""

	tracker = strumline.ramp.RampTracker(bpm=100)
	changes = tracker.tempo_staircase(0.5, start_tick=0, beats=4, ticks_per_beat=192, shape="ease_in")

	assert changes[0].microseconds_per_beat == mido.bpm2tempo(96.875)
	assert tracker.bpm == pytest.approx(50)


def test_rit_arguments (guitar: strumline.Instrument) -> None:

	"""Tempo factors must be positive and ramps at least one measure long."""

	with pytest.raises(strumline.errors.ConfigurationError):
		guitar.rit(0)

	with pytest.raises(strumline.errors.ConfigurationError):
		guitar.rit(0.5, 0)

	with pytest.raises(strumline.errors.ConfigurationError):
		guitar.tempo(-10)
