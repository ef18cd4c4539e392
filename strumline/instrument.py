import fractions
import logging
import random
import typing

import mido

import strumline.config
import strumline.constants
import strumline.constants.velocity
import strumline.errors
import strumline.events
import strumline.midi_file
import strumline.names
import strumline.pattern
import strumline.ramp
import strumline.tab


logger = logging.getLogger(__name__)

Chord = typing.Union[str, typing.Sequence[typing.Union[str, int, None]]]
Tick = typing.Union[int, float, fractions.Fraction]

MUTE = "-"


def aux_channel (index: int) -> int:

	"""
	The MIDI channel for the auxiliary instrument registered at *index*.

	The master owns channel 0, auxiliaries follow from channel 1 and skip the
	percussion channel.
	"""

	channel = index + 1

	if channel >= strumline.constants.PERCUSSION_CHANNEL:
		channel += 1

	if channel > strumline.constants.MAX_CHANNEL:
		raise strumline.errors.ConfigurationError(f"No MIDI channel left for auxiliary instrument {index + 1}")

	return channel


class Instrument:

	"""
	One playable voice: a set of tuned strings (or drums) and the timeline of
	everything played on them.

	The instrument keeps a clock in ticks.  Each ``play()`` applies a pattern
	to a chord and advances the clock by one measure; ``tab()`` advances it by
	the length of the tab.  Strings keep sounding until they are struck again,
	muted, or closed by ``finish()``.

	Example:
		```python
		guitar = strumline.Instrument(signature="3/4", bpm=160, midi="out.mid")

		arpeggio = guitar.pluck("1 5:80", "2 2-4:80", "3 4-2:80")

		guitar.play(arpeggio, "0 0 2 2 1 0")	# Am
		guitar.play(arpeggio, "0 3 2 0 1 0")	# C
		guitar.finish()
		```

	An instrument can also be used as a context manager, finishing when the
	block exits normally.
	"""

	def __init__ (self, config: typing.Optional[strumline.config.InstrumentConfig] = None, rng: typing.Optional[random.Random] = None, **options: typing.Any) -> None:

		"""
		Create an instrument from a config, or from keyword options.

		Parameters:
			config: A prepared ``InstrumentConfig``.
			rng: Random source for time and velocity randomization.  Defaults
				to a ``random.Random`` seeded with ``config.seed``.
			**options: ``InstrumentConfig`` fields (and their aliases) when no
				config is given.

		Raises:
			ConfigurationError: Invalid settings, or unknown instrument,
				note or percussion names.
		"""

		if config is None:
			config = strumline.config.InstrumentConfig.from_dict(options)
		elif options:
			raise strumline.errors.ConfigurationError("Pass either a config or keyword options, not both")

		self.config = config
		self.strikes: strumline.tab.Strikes = strumline.tab.strikes_for(config.percussion)

		assert config.instrument is not None and config.strings is not None and config.channel is not None

		self.patch = strumline.names.instrument_to_patch(config.instrument)
		self.roots: typing.Tuple[int, ...] = tuple(strumline.names.resolve_strings(config.strings, percussion=config.percussion))
		self.sounding: typing.List[typing.Optional[int]] = [None] * len(self.roots)
		self.channel: int = config.channel

		self.rng = rng if rng is not None else random.Random(config.seed)
		self.ramps = strumline.ramp.RampTracker(bpm=config.bpm, volume=config.volume)

		self.ticks_per_beat = config.ticks
		self.beats_per_measure = config.beats_per_measure
		self.ticks_per_measure = config.ticks_per_measure

		self.clock: int = 0
		self.skip: int = 0			# trailing silent ticks, so the metronome can stop early

		if config.lead:
			self.clock += config.lead * self.ticks_per_beat

		# Most recent strike time, before and after randomization.
		self._last_nominal_tick: Tick = 0
		self._last_tick: int = 0

		self.events: typing.List[strumline.events.Event] = []
		self.auxiliaries: typing.List["Instrument"] = []
		self.is_auxiliary = False
		self.finished = False

		logger.info(f"{config.name}: {len(self.roots)} strings, {config.signature} at {config.bpm} BPM, channel {self.channel}, patch {self.patch}")

	def __enter__ (self) -> "Instrument":
		return self

	def __exit__ (self, exc_type: typing.Any, exc_value: typing.Any, traceback: typing.Any) -> None:

		if exc_type is None and not self.is_auxiliary:
			self.finish()

	@property
	def string_count (self) -> int:
		return len(self.roots)

	@property
	def volume (self) -> float:
		return self.ramps.volume

	@property
	def bpm (self) -> float:
		return self.ramps.bpm

	def _require_open (self) -> None:

		if self.finished:
			raise strumline.errors.ConfigurationError(f"{self.config.name}: instrument already finished")

	# ── Patterns ────────────────────────────────────────────────────

	def pluck (self, *specs: str) -> strumline.pattern.Pattern:

		"""Compile pluck specs; see :func:`strumline.pattern.compile_pluck`."""

		return strumline.pattern.compile_pluck(list(specs))

	def strum (self, *specs: str) -> strumline.pattern.Pattern:

		"""Compile strum specs; see :func:`strumline.pattern.compile_strum`."""

		return strumline.pattern.compile_strum(list(specs))

	# ── Note emission ───────────────────────────────────────────────

	def _humanize_tick (self, tick: Tick) -> int:

		"""
		Randomize *tick* by up to ``rtime`` ticks either way.

		Strikes that were written in order stay in order: a randomized tick
		never lands before the previous one.  Strikes written out of order are
		left as they are, so ``finish()`` still reports them.
		"""

		rtime = self.config.rtime
		nominal = tick

		if rtime:
			tick = tick + self.rng.uniform(-rtime, rtime)

		result = max(0, int(round(tick)))

		if nominal >= self._last_nominal_tick:
			result = max(result, self._last_tick)

		self._last_nominal_tick = nominal
		self._last_tick = result

		return result

	def _velocity_jitter (self) -> float:

		rvol = self.config.rvol

		return self.rng.uniform(-rvol, rvol) if rvol else 0.0

	def note (self, tick: int, pitch: int, velocity: float) -> "Instrument":

		"""
		Emit a single note event at *tick*.

		A velocity of zero or less emits a note-off.  Otherwise the volume
		scale (and any active volume ramp) is applied and the result is
		clamped to 1..127, so a quiet strike still sounds.
		"""

		self._require_open()

		if velocity <= 0:
			self.events.append(strumline.events.note_off(tick, self.channel, pitch))
			return self

		volume = self.ramps.volume_at(tick)
		scaled = int(round(velocity * volume))
		scaled = max(strumline.constants.velocity.MIN_VELOCITY, min(strumline.constants.velocity.MAX_VELOCITY, scaled))

		self.events.append(strumline.events.note_on(tick, self.channel, pitch, scaled))

		return self

	def _strike (self, tick: int, index: int, pitch: int, velocity: int, jitter: float, close_sounding: bool = True) -> None:

		"""
		Strike (or mute) string *index* at *tick*, stopping its old note first.
		"""

		sounding = self.sounding[index]

		if close_sounding and sounding is not None:
			self.note(tick, sounding, 0)

		if velocity <= 0:
			if not close_sounding:
				self.note(tick, pitch, 0)
			self.sounding[index] = None
			return

		# Quiet strikes are left alone, so randomization never pushes them to zero.
		self.note(tick, pitch, velocity + jitter if velocity > self.config.rvol else velocity)
		self.sounding[index] = pitch

	# ── Playing ─────────────────────────────────────────────────────

	def _parse_chord (self, chord: Chord) -> typing.List[typing.Optional[int]]:

		"""
		Turn a chord spec (fret numbers lowest string first, ``-`` to leave a
		string alone) into a list of frets.
		"""

		items: typing.Sequence[typing.Union[str, int, None]] = chord.split() if isinstance(chord, str) else chord

		if len(items) != self.string_count:
			raise strumline.errors.ConfigurationError(f"Number of strings must be {self.string_count}: {chord!r}")

		frets: typing.List[typing.Optional[int]] = []

		for root, item in zip(self.roots, items):

			if item is None or item == MUTE:
				frets.append(None)
				continue

			try:
				fret = int(item)
			except (TypeError, ValueError):
				raise strumline.errors.ParseError(f"Invalid fret {item!r} in chord {chord!r}") from None

			if not 0 <= root + fret <= 127:
				raise strumline.errors.ConfigurationError(f"Fret {fret} takes pitch {root + fret} out of MIDI range in chord {chord!r}")

			frets.append(fret)

		return frets

	def _play_measure (self, pattern: strumline.pattern.Pattern, frets: typing.List[typing.Optional[int]]) -> None:

		count = self.string_count

		for group in pattern:

			tick = self._humanize_tick(self.clock + (group.offset - 1) * self.ticks_per_beat)
			jitter = self._velocity_jitter()

			for string, velocity in group.actions:

				# Strings are numbered from the highest; the bank is lowest first.
				index = count - string

				if index < 0 or frets[index] is None:
					continue

				fret = frets[index]
				assert fret is not None

				self._strike(tick, index, self.roots[index] + fret, velocity, jitter)

		self.clock += self.ticks_per_measure

	def play (self, pattern: typing.Optional[strumline.pattern.Pattern] = None, *chords: Chord) -> "Instrument":

		"""
		Play *pattern* once per chord, one measure each.

		Without arguments, play one measure of silence.

		Parameters:
			pattern: A compiled pluck or strum pattern.
			*chords: Chord specs, e.g. ``"0 3 2 0 1 0"`` or ``["-", "-", 0, 2, 3, 2]``.

		Raises:
			ConfigurationError: No chord given, or a chord has the wrong number of strings.
			ParseError: A fret is not a number.
		"""

		self._require_open()

		if pattern is None:
			if chords:
				raise strumline.errors.ConfigurationError("play() needs a pattern to play chords")
			self.clock += self.ticks_per_measure
			self.skip += self.ticks_per_measure
			return self

		if not isinstance(pattern, strumline.pattern.Pattern):
			raise strumline.errors.ConfigurationError(f"play() requires a compiled Pattern, got {type(pattern).__name__}")

		if not chords:
			raise strumline.errors.ConfigurationError("play() requires at least one chord")

		# Validate every chord before anything is emitted.
		parsed = [self._parse_chord(chord) for chord in chords]

		if pattern.last_offset >= self.beats_per_measure + 1:
			logger.warning(f"{self.config.name}: pattern reaches beat {float(pattern.last_offset)}, beyond a {self.beats_per_measure} beat measure")

		self.skip = 0

		for frets in parsed:
			self._play_measure(pattern, frets)

		logger.debug(f"{self.config.name}: played {len(parsed)} measure(s), clock {self.clock}")

		return self

	def rest (self, measures: int = 1) -> "Instrument":

		"""Play *measures* measures of silence."""

		for _ in range(measures):
			self.play()

		return self

	def tab (self, *args: typing.Union[int, str, typing.Sequence[str]], beats: typing.Optional[int] = None) -> "Instrument":

		"""
		Play a tab grid, one line per string, highest string first.

		Call as ``tab(text)``, ``tab(beats, text)`` or ``tab(line, line, ...)``.
		``beats`` is how many beats one measure of the grid spans; it defaults
		to the beats of the time signature, so a 3/4 or 6/8 instrument reads a
		grid measure as 3 or 6 beats.  Pass ``4`` explicitly for tabs written
		as four beats per bar.

		Melodic instruments read each digit as a fret and strike it at a fixed
		velocity; percussion reads it as the force of the hit (0-9).

		Raises:
			ConfigurationError: Wrong number of lines.
			ParseError: A line is not grid text.
			FormatError: The grid is not uniform or does not divide into whole ticks.
		"""

		self._require_open()

		arguments = list(args)

		if len(arguments) > 1 and isinstance(arguments[0], int):
			beats = arguments.pop(0)

		if not arguments or any(isinstance(argument, int) for argument in arguments):
			raise strumline.errors.ConfigurationError("tab() requires tab text")

		lines: typing.Union[str, typing.Sequence[str]]

		if len(arguments) == 1:
			lines = typing.cast(typing.Union[str, typing.Sequence[str]], arguments[0])
		else:
			lines = typing.cast(typing.List[str], arguments)

		grid = strumline.tab.parse_grid(
			lines,
			string_count = self.string_count,
			ticks_per_beat = self.ticks_per_beat,
			beats = beats if beats is not None else self.beats_per_measure,
			uniform = self.strikes.uniform_tabs
		)

		count = self.string_count

		for line, row in enumerate(grid.rows):
			index = count - line - 1
			highest = max((int(cell) for cell in row if cell != "-"), default=0)
			pitch, _ = self.strikes.strike(self.roots[index], highest)
			if pitch > 127:
				raise strumline.errors.ConfigurationError(f"Tab line {line + 1} reaches pitch {pitch}, out of MIDI range")

		tick = self.clock

		for step, cells in grid.columns():

			jitter = self._velocity_jitter()
			at = self._humanize_tick(tick)

			for line, cell in enumerate(cells):

				if cell == "-":
					continue

				index = count - line - 1
				pitch, velocity = self.strikes.strike(self.roots[index], int(cell))

				self._strike(at, index, pitch, velocity, jitter, close_sounding=self.strikes.closes_sounding)

			tick += step

		self.clock = tick

		# A tab counts as sounding music, so the metronome runs through it.
		self.skip = 0

		logger.debug(f"{self.config.name}: played {len(grid.steps)} tab columns, clock {self.clock}")

		return self

	# ── Volume and tempo ────────────────────────────────────────────

	def cresc (self, factor: float, measures: int = 1, shape: typing.Union[str, strumline.ramp.EasingFn] = "linear") -> "Instrument":

		"""
		Ramp the volume to *factor* times its current value over *measures* measures.

		The ramp starts one beat before the clock, so the next strike already
		feels it.  A new ramp replaces one still in progress.
		"""

		self._require_open()

		if measures <= 0:
			raise strumline.errors.ConfigurationError(f"Crescendo must last at least one measure: {measures}")

		self.ramps.start_volume_ramp(
			factor = factor,
			start_tick = self.clock - self.ticks_per_beat,
			length_ticks = measures * self.ticks_per_measure,
			shape = shape
		)

		return self

	decresc = cresc

	def tempo (self, bpm: float, tick: typing.Optional[int] = None) -> "Instrument":

		"""
		Change the tempo at *tick* (default: the current clock).
		"""

		self._require_open()

		if self.is_auxiliary:
			raise strumline.errors.ConfigurationError("Tempo changes belong to the master instrument")

		self.ramps.set_tempo(bpm, self.clock if tick is None else tick)

		return self

	def rit (self, factor: float, measures: int = 1, shape: typing.Union[str, strumline.ramp.EasingFn] = "linear") -> "Instrument":

		"""
		Ramp the tempo to *factor* times its current value over *measures*
		measures, one tempo change per beat.  A factor above 1 speeds up.
		"""

		self._require_open()

		if self.is_auxiliary:
			raise strumline.errors.ConfigurationError("Tempo changes belong to the master instrument")

		if measures <= 0:
			raise strumline.errors.ConfigurationError(f"Ritardando must last at least one measure: {measures}")

		self.ramps.tempo_staircase(
			factor = factor,
			start_tick = self.clock,
			beats = measures * self.beats_per_measure,
			ticks_per_beat = self.ticks_per_beat,
			shape = shape
		)

		return self

	accel = rit

	# ── Auxiliary instruments ───────────────────────────────────────

	def aux (self, **options: typing.Any) -> "Instrument":

		"""
		Create an auxiliary instrument that is finished together with this one.

		The auxiliary shares this instrument's time signature, tempo, tick
		resolution, lead-in and random source, and gets the next free MIDI
		channel unless it is percussion or sets ``channel`` itself.
		"""

		self._require_open()

		if self.is_auxiliary:
			raise strumline.errors.ConfigurationError("An auxiliary instrument cannot have auxiliaries")

		for shared in ("signature", "sig", "bpm", "tempo", "ticks", "lead", "midi", "file"):
			if shared in options:
				raise strumline.errors.ConfigurationError(f"Auxiliary instruments share {shared!r} with their master")

		values = dict(options)
		values["signature"] = self.config.signature
		values["bpm"] = self.config.bpm
		values["ticks"] = self.ticks_per_beat
		values["lead"] = self.config.lead
		values["metronome"] = False
		values["attribution"] = False

		if not values.get("percussion") and "channel" not in values and "chan" not in values:
			values["channel"] = aux_channel(len(self.auxiliaries))

		values.setdefault("name", f"{self.config.name} {len(self.auxiliaries) + 1}")

		aux = Instrument(strumline.config.InstrumentConfig.from_dict(values), rng=self.rng)
		aux.is_auxiliary = True

		self.auxiliaries.append(aux)

		return aux

	# ── Finishing ───────────────────────────────────────────────────

	def finish (self, midi: typing.Optional[str] = None, attribution: typing.Optional[bool] = None) -> typing.Optional[mido.MidiFile]:

		"""
		Close all sounding notes and build the MIDI file, writing it if a
		filename is configured or given.

		Returns ``None`` if the instrument was already finished.
		"""

		if self.is_auxiliary:
			raise strumline.errors.ConfigurationError("Auxiliary instruments are finished by their master")

		return strumline.midi_file.finish(self, midi=midi, attribution=attribution)
