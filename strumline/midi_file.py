"""Finalize instruments into a Standard MIDI File.

Finishing an instrument:

1. closes every string that is still sounding, at the current clock;
2. builds the control track: attribution text, initial tempo, time
   signature, then every queued tempo change in the order it was recorded;
3. converts each track from absolute ticks to delta ticks, refusing to
   reorder anything (a backwards step raises ``TimingError``);
4. names the note track and selects its program;
5. adds a metronome track when a lead-in is configured;
6. adds one note track per auxiliary instrument, in registration order;

and hands the tracks to ``mido`` as a type 1 file.
"""

import logging
import typing

import mido

import strumline.constants
import strumline.constants.velocity
import strumline.events

if typing.TYPE_CHECKING:
	import strumline.instrument


logger = logging.getLogger(__name__)

# MIDI time signature defaults: one metronome click per quarter, 8 32nds per quarter.
CLOCKS_PER_CLICK = 24
NOTATED_32ND_NOTES_PER_BEAT = 8


def to_message (event: strumline.events.Event, delta: int) -> typing.Union[mido.Message, mido.MetaMessage]:

	"""
	Convert a raw event into a mido message carrying *delta* as its time.
	"""

	if event.kind == "note_on":
		return mido.Message("note_on", channel=event.channel, note=event.pitch, velocity=event.velocity, time=delta)

	if event.kind == "note_off":
		return mido.Message("note_off", channel=event.channel, note=event.pitch, velocity=event.velocity, time=delta)

	if event.kind == "program_change":
		return mido.Message("program_change", channel=event.channel, program=event.value, time=delta)

	if event.kind == "set_tempo":
		return mido.MetaMessage("set_tempo", tempo=event.value, time=delta)

	if event.kind == "time_signature":
		numerator, denominator = event.signature
		return mido.MetaMessage(
			"time_signature",
			numerator = numerator,
			denominator = denominator,
			clocks_per_click = CLOCKS_PER_CLICK,
			notated_32nd_notes_per_beat = NOTATED_32ND_NOTES_PER_BEAT,
			time = delta
		)

	if event.kind == "track_name":
		return mido.MetaMessage("track_name", name=event.text, time=delta)

	if event.kind == "text":
		return mido.MetaMessage("text", text=event.text, time=delta)

	raise ValueError(f"Unknown event kind: {event.kind}")


def to_track (events: typing.Iterable[strumline.events.Event]) -> mido.MidiTrack:

	"""
	Build a mido track from events in absolute time.

	Raises:
		TimingError: The events are not in time order.
	"""

	track = mido.MidiTrack()

	for delta, event in strumline.events.to_delta(events):
		track.append(to_message(event, delta))

	return track


def control_events (instrument: "strumline.instrument.Instrument", attribution: bool = True) -> typing.List[strumline.events.Event]:

	"""
	The control track: attribution, initial tempo, time signature and queued tempo changes.
	"""

	config = instrument.config
	events: typing.List[strumline.events.Event] = []

	if attribution:
		events.append(strumline.events.text(0, strumline.constants.ATTRIBUTION))

	events.append(strumline.events.set_tempo(0, mido.bpm2tempo(instrument.ramps.initial_bpm)))
	events.append(strumline.events.time_signature(0, config.beats_per_measure, config.beat_unit))

	for change in instrument.ramps.tempo_changes:
		events.append(strumline.events.set_tempo(change.tick, change.microseconds_per_beat))

	return events


def note_track_events (instrument: "strumline.instrument.Instrument") -> typing.List[strumline.events.Event]:

	"""
	The instrument's note track: track name, program change, every recorded
	event, then a note-off at the clock for each string still sounding.

	The instrument itself is not changed.
	"""

	events = [
		strumline.events.track_name(0, instrument.config.name or ""),
		strumline.events.program_change(0, instrument.channel, instrument.patch),
	]
	events.extend(instrument.events)

	for pitch in instrument.sounding:
		if pitch is not None:
			events.append(strumline.events.note_off(instrument.clock, instrument.channel, pitch))

	return events


def close (instrument: "strumline.instrument.Instrument") -> None:

	"""
	Mark *instrument* finished: nothing sounds and no events are kept.
	"""

	instrument.sounding = [None] * len(instrument.sounding)
	instrument.events = []
	instrument.finished = True


def metronome_events (instrument: "strumline.instrument.Instrument") -> typing.Optional[typing.List[strumline.events.Event]]:

	"""
	Clicks on every beat, from tick 0 up to the end of the piece (ignoring
	trailing silent measures), or only through the lead-in when the metronome
	is switched off.  ``None`` when no lead-in is configured.
	"""

	config = instrument.config

	if config.lead is None:
		return None

	if config.metronome:
		end = instrument.clock - instrument.skip
	else:
		end = config.lead * instrument.ticks_per_beat

	channel = strumline.constants.PERCUSSION_CHANNEL
	note = strumline.constants.METRONOME_NOTE
	velocity = strumline.constants.velocity.METRONOME_VELOCITY

	events = [
		strumline.events.track_name(0, strumline.constants.METRONOME_TRACK_NAME),
		strumline.events.program_change(0, channel, strumline.constants.DEFAULT_DRUM_KIT),
	]

	tick = 0

	while tick < end:
		events.append(strumline.events.note_on(tick, channel, note, velocity))
		events.append(strumline.events.note_off(tick + strumline.constants.METRONOME_CLICK_TICKS, channel, note))
		tick += instrument.ticks_per_beat

	return events


def finish (instrument: "strumline.instrument.Instrument", midi: typing.Optional[str] = None, attribution: typing.Optional[bool] = None) -> typing.Optional[mido.MidiFile]:

	"""
	Finalize *instrument* (and its auxiliaries) into a type 1 MIDI file.

	Parameters:
		instrument: The master instrument.
		midi: Output path, overriding the instrument's configured ``midi``.
		attribution: Override the configured attribution text setting.

	Returns:
		The ``mido.MidiFile``, or ``None`` if the instrument was already finished.
	"""

	if instrument.finished:
		logger.debug(f"{instrument.config.name}: already finished")
		return None

	config = instrument.config

	if attribution is None:
		attribution = config.attribution

	# Every track is built before anything is closed, so a TimingError
	# leaves the instrument and its auxiliaries untouched.
	tracks = [
		to_track(control_events(instrument, attribution=attribution)),
		to_track(note_track_events(instrument)),
	]

	metronome = metronome_events(instrument)

	if metronome is not None:
		tracks.append(to_track(metronome))

	for aux in instrument.auxiliaries:
		tracks.append(to_track(note_track_events(aux)))

	close(instrument)

	for aux in instrument.auxiliaries:
		close(aux)

	mid = mido.MidiFile(type=1, ticks_per_beat=instrument.ticks_per_beat)
	mid.tracks.extend(tracks)

	logger.info(f"{config.name}: finished with {len(tracks)} tracks, {instrument.clock} ticks")

	filename = midi or config.midi

	if filename:
		try:
			mid.save(filename)
		except OSError as e:
			logger.error(f"Failed to save MIDI file {filename}: {e}")
			raise
		logger.info(f"Saved {filename}")

	return mid
