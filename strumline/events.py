import dataclasses
import typing

import strumline.errors


@dataclasses.dataclass
class Event:

	"""
	A raw timeline event at an absolute tick.

	``kind`` is one of ``note_on``, ``note_off``, ``set_tempo``,
	``time_signature``, ``track_name``, ``program_change`` or ``text``.
	"""

	kind: str
	tick: int
	channel: int = 0
	pitch: int = 0
	velocity: int = 0
	value: int = 0							# tempo (microseconds per beat) or program number
	text: str = ""
	signature: typing.Tuple[int, int] = (4, 4)	# time_signature only: (numerator, denominator)


def note_on (tick: int, channel: int, pitch: int, velocity: int) -> Event:
	return Event("note_on", tick, channel=channel, pitch=pitch, velocity=velocity)


def note_off (tick: int, channel: int, pitch: int) -> Event:
	return Event("note_off", tick, channel=channel, pitch=pitch, velocity=0)


def set_tempo (tick: int, microseconds_per_beat: int) -> Event:
	return Event("set_tempo", tick, value=microseconds_per_beat)


def time_signature (tick: int, numerator: int, denominator: int) -> Event:
	return Event("time_signature", tick, signature=(numerator, denominator))


def track_name (tick: int, name: str) -> Event:
	return Event("track_name", tick, text=name)


def text (tick: int, content: str) -> Event:
	return Event("text", tick, text=content)


def program_change (tick: int, channel: int, program: int) -> Event:
	return Event("program_change", tick, channel=channel, value=program)


def to_delta (events: typing.Iterable[Event]) -> typing.List[typing.Tuple[int, Event]]:

	"""
	Pair each event with the ticks elapsed since the previous event in the list.

	The events keep their absolute ticks; only the returned deltas are relative.

	Raises:
		TimingError: An event comes before the event preceding it.
	"""

	result: typing.List[typing.Tuple[int, Event]] = []
	now = 0

	for event in events:

		if event.tick < now:
			raise strumline.errors.TimingError(
				f"Negative delta @ {now}: {event.tick - now} ({event.kind} at tick {event.tick})"
			)

		result.append((event.tick - now, event))
		now = event.tick

	return result


def to_absolute (deltas: typing.Iterable[int]) -> typing.List[int]:

	"""
	Accumulate delta times back into absolute ticks.
	"""

	ticks: typing.List[int] = []
	now = 0

	for delta in deltas:
		now += delta
		ticks.append(now)

	return ticks
