"""Volume and tempo ramps.

A volume ramp (crescendo or decrescendo) is continuous: it is evaluated
lazily every time a note is emitted, at that note's tick.  Only one volume
ramp is active at a time; a new one replaces the old one.

A tempo ramp (ritardando or accelerando) cannot be continuous, because a
MIDI file only carries discrete tempo changes.  It is emitted up front as a
staircase of ``set_tempo`` changes, one per beat.

Both accept an easing ``shape`` that maps progress in [0, 1] to [0, 1]:

    "linear"      Constant rate (default).
    "ease_in"     Slow start, accelerates.
    "ease_out"    Fast start, decelerates.
    "ease_in_out" Smooth S-curve (Hermite smoothstep).
"""

import dataclasses
import logging
import typing

import mido

import strumline.errors


logger = logging.getLogger(__name__)


EasingFn = typing.Callable[[float], float]


def linear (t: float) -> float:
	return t


def ease_in (t: float) -> float:
	return t * t


def ease_out (t: float) -> float:
	return 1.0 - (1.0 - t) * (1.0 - t)


def ease_in_out (t: float) -> float:
	return t * t * (3.0 - 2.0 * t)


SHAPES: typing.Dict[str, EasingFn] = {
	"linear":      linear,
	"ease_in":     ease_in,
	"ease_out":    ease_out,
	"ease_in_out": ease_in_out,
}


def get_shape (shape: typing.Union[str, EasingFn]) -> EasingFn:

	"""
	Return the easing function for *shape*, a name from :data:`SHAPES` or a callable.
	"""

	if callable(shape):
		return shape

	if shape not in SHAPES:
		available = ", ".join(f'"{k}"' for k in sorted(SHAPES))
		raise strumline.errors.ConfigurationError(f"Unknown ramp shape {shape!r}. Available shapes: {available}")

	return SHAPES[shape]


@dataclasses.dataclass
class VolumeRamp:

	"""State for a gradual volume change between two ticks."""

	start_tick: float
	start_value: float
	end_tick: float
	end_value: float
	easing_fn: EasingFn = linear

	def value_at (self, tick: float) -> float:

		"""The interpolated volume at *tick* (which must lie within the ramp)."""

		if self.end_tick == self.start_tick:
			return self.end_value

		progress = (tick - self.start_tick) / (self.end_tick - self.start_tick)
		return self.start_value + (self.end_value - self.start_value) * self.easing_fn(progress)


@dataclasses.dataclass
class TempoChange:

	tick: int
	microseconds_per_beat: int


class RampTracker:

	"""
	Holds the volume scale, the active volume ramp, the current tempo and the
	queue of tempo changes for one instrument.
	"""

	def __init__ (self, bpm: float, volume: float = 1.0) -> None:

		if bpm <= 0:
			raise strumline.errors.ConfigurationError("BPM must be positive")

		self.initial_bpm = bpm
		self.bpm = bpm
		self.volume = volume
		self.ramp: typing.Optional[VolumeRamp] = None
		self.tempo_changes: typing.List[TempoChange] = []

	def start_volume_ramp (self, factor: float, start_tick: float, length_ticks: float, shape: typing.Union[str, EasingFn] = "linear") -> VolumeRamp:

		"""
		Begin ramping the volume from its current value to ``factor`` times that value.

		Any ramp already in progress is replaced, not merged.
		"""

		if factor < 0:
			raise strumline.errors.ConfigurationError("Volume factor cannot be negative")

		if length_ticks <= 0:
			raise strumline.errors.ConfigurationError("Ramp length must be positive")

		self.ramp = VolumeRamp(
			start_tick = start_tick,
			start_value = self.volume,
			end_tick = start_tick + length_ticks,
			end_value = factor * self.volume,
			easing_fn = get_shape(shape)
		)

		logger.debug(f"Volume ramp {self.ramp.start_value:.3f} → {self.ramp.end_value:.3f} over ticks {start_tick}..{self.ramp.end_tick}")

		return self.ramp

	def volume_at (self, tick: float) -> float:

		"""
		Return the volume scale for a note at *tick*, advancing the ramp.

		Once a note reaches the end of the ramp, the ramp's end value becomes
		the steady volume and the ramp is cleared.
		"""

		ramp = self.ramp

		if ramp is not None:
			if tick >= ramp.end_tick:
				self.volume = ramp.end_value
				self.ramp = None
			elif tick >= ramp.start_tick:
				self.volume = ramp.value_at(tick)

		return self.volume

	def set_tempo (self, bpm: float, tick: int) -> TempoChange:

		"""
		Queue a tempo change at *tick* and make *bpm* the current tempo.
		"""

		if bpm <= 0:
			raise strumline.errors.ConfigurationError("BPM must be positive")

		change = TempoChange(tick=tick, microseconds_per_beat=mido.bpm2tempo(bpm))
		self.tempo_changes.append(change)
		self.bpm = bpm

		return change

	def tempo_staircase (self, factor: float, start_tick: int, beats: int, ticks_per_beat: int, shape: typing.Union[str, EasingFn] = "linear") -> typing.List[TempoChange]:

		"""
		Queue one tempo change per beat, moving from the current tempo to
		``factor`` times the current tempo.

		The first step already departs from the current tempo; the last step
		lands exactly on the target.
		"""

		if factor <= 0:
			raise strumline.errors.ConfigurationError("Tempo factor must be positive")

		if beats <= 0:
			raise strumline.errors.ConfigurationError("Tempo ramp must last at least one beat")

		easing_fn = get_shape(shape)
		start_bpm = self.bpm
		target_bpm = factor * start_bpm
		changes: typing.List[TempoChange] = []

		for step in range(1, beats + 1):
			bpm = start_bpm + (target_bpm - start_bpm) * easing_fn(step / beats)
			changes.append(self.set_tempo(bpm, start_tick + (step - 1) * ticks_per_beat))

		logger.debug(f"Tempo ramp {start_bpm:.2f} → {target_bpm:.2f} over {beats} beats")

		return changes
