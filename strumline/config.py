import dataclasses
import logging
import os
import re
import typing

import yaml

import strumline.constants
import strumline.errors


logger = logging.getLogger(__name__)

_SIGNATURE_RE = re.compile(r"^(\d+)/(\d+)$")

# Denominator → the power-of-two exponent stored in a MIDI time signature.
SIGNATURE_DENOMINATORS: typing.Dict[int, int] = {1: 0, 2: 1, 4: 2, 8: 3, 16: 4}

# Keyword spellings accepted by from_dict() in addition to the field names.
ALIASES: typing.Dict[str, str] = {
	"sig": "signature",
	"tempo": "bpm",
	"instr": "instrument",
	"kit": "instrument",
	"instruments": "strings",
	"chan": "channel",
	"file": "midi",
}


@dataclasses.dataclass
class InstrumentConfig:

	"""
	Construction-time settings for one instrument.

	Fields left as ``None`` are filled with defaults that depend on whether
	the instrument is melodic or percussion.  Setting ``channel`` to the
	percussion channel (9) selects percussion.

	Parameters:
		name: Track name.
		signature: Time signature, ``"N/D"`` with D one of 1, 2, 4, 8, 16.
		bpm: Initial tempo in beats per minute.
		instrument: GM program name or number (drum kit number for percussion).
		strings: Tuning (note names, lowest string first) or percussion names.
		volume: Scale applied to every velocity, 0 to 1.5.
		rtime: Time randomization in ticks, 0 to 10.
		rvol: Velocity randomization, 0 to 6.
		lead: Lead-in beats.  ``None`` means no lead-in and no metronome track.
		metronome: With ``lead`` set, click through the whole piece (True) or
			only through the lead-in (False).
		midi: File written by ``finish()``.
		channel: MIDI channel, 0 to 15.
		percussion: Resolve strings as GM percussion and use percussion tabs.
		seed: Seed for the instrument's random source.
		ticks: Tick resolution per beat.
		attribution: Put a text event naming the generator in the control track.
	"""

	name: typing.Optional[str] = None
	signature: str = strumline.constants.DEFAULT_SIGNATURE
	bpm: float = strumline.constants.DEFAULT_BPM
	instrument: typing.Optional[typing.Union[str, int]] = None
	strings: typing.Optional[typing.Union[str, typing.Sequence[typing.Union[str, int]]]] = None
	volume: float = 1.0
	rtime: float = 0
	rvol: float = 0
	lead: typing.Optional[int] = None
	metronome: bool = True
	midi: typing.Optional[str] = None
	channel: typing.Optional[int] = None
	percussion: bool = False
	seed: typing.Optional[int] = None
	ticks: int = strumline.constants.TICKS_PER_BEAT
	attribution: bool = True

	def __post_init__ (self) -> None:

		if self.channel == strumline.constants.PERCUSSION_CHANNEL:
			self.percussion = True

		if self.channel is None:
			self.channel = strumline.constants.PERCUSSION_CHANNEL if self.percussion else 0

		if self.name is None:
			self.name = "Percussion" if self.percussion else "Guitar"

		if self.instrument is None:
			self.instrument = strumline.constants.DEFAULT_DRUM_KIT if self.percussion else strumline.constants.DEFAULT_INSTRUMENT

		if self.strings is None:
			self.strings = list(strumline.constants.DEFAULT_PERCUSSION) if self.percussion else strumline.constants.DEFAULT_TUNING

		self.parse_signature(self.signature)

		if self.bpm <= 0:
			raise strumline.errors.ConfigurationError(f"BPM must be positive: {self.bpm}")

		if not 0 <= self.channel <= strumline.constants.MAX_CHANNEL:
			raise strumline.errors.ConfigurationError(f"MIDI channel must be between 0 and {strumline.constants.MAX_CHANNEL}: {self.channel}")

		if not 0 <= self.volume <= strumline.constants.MAX_VOLUME:
			raise strumline.errors.ConfigurationError(f"Volume must be between 0 and {strumline.constants.MAX_VOLUME}: {self.volume}")

		if not 0 <= self.rtime <= strumline.constants.MAX_RTIME:
			raise strumline.errors.ConfigurationError(f"Time randomizer must be between 0 and {strumline.constants.MAX_RTIME}: {self.rtime}")

		if not 0 <= self.rvol <= strumline.constants.MAX_RVOL:
			raise strumline.errors.ConfigurationError(f"Volume randomizer must be between 0 and {strumline.constants.MAX_RVOL}: {self.rvol}")

		if self.lead is not None and self.lead < 0:
			raise strumline.errors.ConfigurationError(f"Lead-in cannot be negative: {self.lead}")

		if self.ticks <= 0:
			raise strumline.errors.ConfigurationError(f"Tick resolution must be positive: {self.ticks}")

	@staticmethod
	def parse_signature (signature: str) -> typing.Tuple[int, int]:

		"""
		Split ``"N/D"`` into ``(N, D)``.

		Raises:
			ConfigurationError: Malformed, or D is not a supported power of two.
		"""

		match = _SIGNATURE_RE.match(signature.strip())

		if match is None:
			raise strumline.errors.ConfigurationError(f"Invalid time signature: {signature}")

		numerator, denominator = int(match.group(1)), int(match.group(2))

		if numerator < 1 or denominator not in SIGNATURE_DENOMINATORS:
			raise strumline.errors.ConfigurationError(f"Invalid time signature: {signature}")

		return numerator, denominator

	@property
	def beats_per_measure (self) -> int:
		return self.parse_signature(self.signature)[0]

	@property
	def beat_unit (self) -> int:
		return self.parse_signature(self.signature)[1]

	@property
	def ticks_per_measure (self) -> int:
		return self.beats_per_measure * self.ticks

	@classmethod
	def from_dict (cls, options: typing.Mapping[str, typing.Any]) -> "InstrumentConfig":

		"""
		Build a config from keyword options, accepting the aliases in :data:`ALIASES`.

		Raises:
			ConfigurationError: An option is unknown or given twice under different spellings.
		"""

		fields = {field.name for field in dataclasses.fields(cls)}
		values: typing.Dict[str, typing.Any] = {}

		for key, value in options.items():

			target = ALIASES.get(key, key)

			if target not in fields:
				raise strumline.errors.ConfigurationError(f"Unknown instrument option: {key}")

			if target in values:
				raise strumline.errors.ConfigurationError(f"Instrument option given twice: {key} ({target})")

			values[target] = value

		return cls(**values)


def load_config (path: str) -> typing.Dict[str, typing.Any]:

	"""
	Load a YAML document (a score or a set of instrument options).
	"""

	if not os.path.exists(path):
		raise strumline.errors.ConfigurationError(f"Config file {path} not found")

	with open(path, "r") as f:
		data = yaml.safe_load(f)

	if data is None:
		logger.warning(f"Config file {path} is empty")
		return {}

	if not isinstance(data, dict):
		raise strumline.errors.ConfigurationError(f"Config file {path} must contain a mapping")

	return data
