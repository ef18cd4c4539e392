import logging
import pathlib

import mido
import pytest

import strumline
import strumline.constants
import strumline.errors
import strumline.events
import strumline.midi_file


def _messages (track: mido.MidiTrack, *types: str) -> list:
	return [message for message in track if message.type in types]


# ---------------------------------------------------------------------------
# Delta conversion
# ---------------------------------------------------------------------------

def test_to_delta_and_back () -> None:

	"""Deltas accumulate back to the original absolute ticks."""

	events = [
		strumline.events.note_on(0, 0, 40, 90),
		strumline.events.note_on(192, 0, 64, 80),
		strumline.events.note_off(768, 0, 40),
		strumline.events.note_off(768, 0, 64),
	]

	deltas = [delta for delta, _ in strumline.events.to_delta(events)]

	assert deltas == [0, 192, 576, 0]
	assert strumline.events.to_absolute(deltas) == [0, 192, 768, 768]


def test_to_delta_refuses_to_reorder () -> None:

	"""An event earlier than its predecessor is a timing error."""

	events = [strumline.events.note_on(100, 0, 40, 90), strumline.events.note_on(50, 0, 41, 90)]

	with pytest.raises(strumline.errors.TimingError, match="Negative delta @ 100: -50"):
		strumline.events.to_delta(events)


def test_out_of_order_notes_fail_at_finish (guitar: strumline.Instrument) -> None:

	"""Notes emitted out of time order are reported when the file is built."""

	guitar.note(100, 60, 80)
	guitar.note(50, 62, 80)

	with pytest.raises(strumline.errors.TimingError):
		guitar.finish()

	assert guitar.finished is False
	assert len(guitar.events) == 2


def test_failed_finish_keeps_the_performance (guitar: strumline.Instrument) -> None:

	"""A pattern written out of order fails every time, and nothing is lost."""

	guitar.play(guitar.pluck("3 1:80", "1 6:80"), "0 0 0 0 0 0")

	events = list(guitar.events)
	sounding = list(guitar.sounding)

	for _ in range(2):
		with pytest.raises(strumline.errors.TimingError):
			guitar.finish()

	assert guitar.finished is False
	assert guitar.events == events
	assert guitar.sounding == sounding


def test_failing_aux_keeps_master_open (guitar: strumline.Instrument) -> None:

	"""An auxiliary that cannot be converted leaves the master unfinished too."""

	bass = guitar.aux(strings="E1 A1 D2 G2")
	bass.note(100, 28, 80)
	bass.note(50, 33, 80)

	guitar.play(guitar.pluck("1 1:80"), "0 0 0 0 0 0")

	with pytest.raises(strumline.errors.TimingError):
		guitar.finish()

	assert guitar.finished is False
	assert bass.finished is False
	assert guitar.sounding[5] == 64


def test_finish_closes_sounding_strings (guitar: strumline.Instrument) -> None:

	"""Strings still ringing get a note-off at the clock, and the instrument is emptied."""

	guitar.play(guitar.pluck("1 1:80"), "0 0 0 0 0 0")

	mid = guitar.finish()

	assert mid is not None

	offs = _messages(mid.tracks[1], "note_off")

	assert [(m.note, m.time) for m in offs] == [(64, 768)]
	assert guitar.sounding == [None] * 6
	assert guitar.events == []


# ---------------------------------------------------------------------------
# Tracks
# ---------------------------------------------------------------------------

def test_control_track (guitar: strumline.Instrument) -> None:

	"""Tempo then time signature, with the standard click settings."""

	mid = guitar.finish()

	assert mid is not None
	assert mid.type == 1
	assert mid.ticks_per_beat == 192

	control = list(mid.tracks[0])

	assert [m.type for m in control] == ["set_tempo", "time_signature"]
	assert control[0].tempo == 600000

	signature = control[1]

	assert (signature.numerator, signature.denominator) == (4, 4)
	assert signature.clocks_per_click == 24
	assert signature.notated_32nd_notes_per_beat == 8


def test_control_track_attribution () -> None:

	"""The attribution text comes first, and can be switched off at finish."""

	mid = strumline.Instrument(signature="6/8").finish()

	assert mid is not None
	assert mid.tracks[0][0].type == "text"
	assert mid.tracks[0][0].text == strumline.constants.ATTRIBUTION
	assert mid.tracks[0][2].denominator == 8

	quiet = strumline.Instrument().finish(attribution=False)

	assert quiet is not None
	assert _messages(quiet.tracks[0], "text") == []


def test_control_track_tempo_changes (guitar: strumline.Instrument) -> None:

	"""Queued tempo changes follow the initial tempo, in order."""

	guitar.play()
	guitar.rit(0.5)

	mid = guitar.finish()

	assert mid is not None

	tempos = _messages(mid.tracks[0], "set_tempo")

	assert len(tempos) == 5
	assert tempos[1].time == 768
	assert [m.time for m in tempos[2:]] == [192, 192, 192]
	assert tempos[-1].tempo == mido.bpm2tempo(50)


def test_note_track_header (guitar: strumline.Instrument) -> None:

	"""The note track is named and selects the program on the instrument's channel."""

	mid = guitar.finish()

	assert mid is not None

	name, program = mid.tracks[1][0], mid.tracks[1][1]

	assert name.type == "track_name" and name.name == "Guitar"
	assert program.type == "program_change" and program.program == 24 and program.channel == 0


def test_finish_twice_returns_none (guitar: strumline.Instrument) -> None:

	"""A finished instrument cannot be finished again."""

	assert guitar.finish() is not None
	assert guitar.finish() is None


# ---------------------------------------------------------------------------
# Metronome
# ---------------------------------------------------------------------------

def test_no_metronome_without_lead (guitar: strumline.Instrument) -> None:

	"""Without a lead-in there is no metronome track."""

	guitar.play()

	mid = guitar.finish()

	assert mid is not None
	assert len(mid.tracks) == 2


def test_metronome_through_piece () -> None:

	"""Clicks every beat from the start to the end of the last sounding measure."""

	guitar = strumline.Instrument(lead=2, attribution=False)
	guitar.play(guitar.pluck("1 1:80"), "0 0 0 0 0 0")
	guitar.rest(2)

	mid = guitar.finish()

	assert mid is not None
	assert len(mid.tracks) == 3

	metronome = mid.tracks[2]

	assert metronome[0].name == strumline.constants.METRONOME_TRACK_NAME

	clicks = _messages(metronome, "note_on")
	offs = _messages(metronome, "note_off")

	assert len(clicks) == 6
	assert all(m.channel == 9 and m.note == 37 and m.velocity == 70 for m in clicks)
	assert all(m.time == 1 for m in offs)
	assert all(m.time == 191 for m in clicks[1:])


def test_metronome_lead_in_only () -> None:

	"""With the metronome off, only the lead-in beats click."""

	guitar = strumline.Instrument(lead=4, metronome=False, attribution=False)
	guitar.play(guitar.pluck("1 1:80"), "0 0 0 0 0 0")

	mid = guitar.finish()

	assert mid is not None
	assert len(_messages(mid.tracks[2], "note_on")) == 4


def test_lead_delays_notes () -> None:

	"""The first note sounds after the lead-in."""

	guitar = strumline.Instrument(lead=4, attribution=False)
	guitar.play(guitar.pluck("1 1:80"), "0 0 0 0 0 0")

	mid = guitar.finish()

	assert mid is not None
	assert _messages(mid.tracks[1], "note_on")[0].time == 768


# ---------------------------------------------------------------------------
# Saving
# ---------------------------------------------------------------------------

def test_save_and_read_back (tmp_path: pathlib.Path) -> None:

	"""The written file reads back with the same notes."""

	path = tmp_path / "song.mid"

	guitar = strumline.Instrument(midi=str(path))
	guitar.play(guitar.strum("1 4/4 6:90 1-3:80"), "0 3 2 0 1 0")
	guitar.finish()

	mid = mido.MidiFile(str(path))

	assert mid.type == 1
	assert mid.ticks_per_beat == 192
	assert len(mid.tracks) == 2

	ons = [(m.note, m.velocity) for m in mid.tracks[1] if m.type == "note_on" and m.velocity > 0]

	assert ons == [(40, 90), (64, 80), (60, 80), (55, 80)]


def test_finish_path_overrides_config (tmp_path: pathlib.Path) -> None:

	"""A path given to finish() wins over the configured one."""

	configured = tmp_path / "configured.mid"
	given = tmp_path / "given.mid"

	strumline.Instrument(midi=str(configured)).finish(midi=str(given))

	assert given.exists()
	assert not configured.exists()


def test_failed_save_is_logged_and_raised (tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture) -> None:

	"""A write failure is logged and propagated."""

	path = tmp_path / "missing" / "song.mid"

	with caplog.at_level(logging.ERROR, logger="strumline.midi_file"):
		with pytest.raises(OSError):
			strumline.Instrument(midi=str(path)).finish()

	assert "Failed to save MIDI file" in caplog.text


def test_unknown_event_kind () -> None:

	"""Only known event kinds convert to messages."""

	with pytest.raises(ValueError, match="Unknown event kind: pitch_bend"):
		strumline.midi_file.to_message(strumline.events.Event("pitch_bend", 0), 0)
