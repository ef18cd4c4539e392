"""Name resolution for notes, GM programs and GM percussion voices.

All three lookups accept either a name or an integer that is already a valid
number, so configuration can mix both freely.
"""

import re
import typing

import strumline.constants.gm_instruments
import strumline.constants.gm_percussion
import strumline.errors


NOTE_OFFSETS: typing.Dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

_NOTE_RE = re.compile(r"^([A-Ga-g])(#|s|S|b)?(-?\d)$")


def _normalise (name: str) -> str:
	return re.sub(r"\s+", "", name).lower()


_PATCHES: typing.Dict[str, int] = {
	_normalise(name): number
	for name, number in strumline.constants.gm_instruments.GM_PATCH_NUMBERS.items()
}

_PERCUSSION: typing.Dict[str, int] = {
	_normalise(name): number
	for name, number in strumline.constants.gm_percussion.GM_PERCUSSION_MAP.items()
}


def note_to_pitch (name: typing.Union[str, int]) -> int:

	"""
	Convert a note name to a MIDI pitch number, with C4 = 60 (Middle C).

	Accepts naturals (``"E2"``), sharps (``"F#3"``, ``"Fs3"``) and flats
	(``"Bb3"``), octaves -1 through 9.

	Raises:
		UnknownNote: The name is malformed or lies outside 0-127.
	"""

	if isinstance(name, int):
		if not 0 <= name <= 127:
			raise strumline.errors.UnknownNote(f"Pitch out of range: {name}")
		return name

	match = _NOTE_RE.match(name.strip())

	if match is None:
		raise strumline.errors.UnknownNote(f"Unknown note: {name!r}")

	letter, accidental, octave = match.groups()
	pitch = (int(octave) + 1) * 12 + NOTE_OFFSETS[letter.upper()]

	if accidental in ("#", "s", "S"):
		pitch += 1
	elif accidental == "b":
		pitch -= 1

	if not 0 <= pitch <= 127:
		raise strumline.errors.UnknownNote(f"Note out of range: {name!r}")

	return pitch


def instrument_to_patch (name: typing.Union[str, int]) -> int:

	"""
	Convert a General MIDI program name (or number) to a program number.

	Matching ignores case and whitespace, so ``"acoustic guitar (nylon)"``
	finds ``"Acoustic Guitar(nylon)"``.
	"""

	if isinstance(name, int) or (isinstance(name, str) and name.strip().isdigit()):
		number = int(name)
		if not 0 <= number <= 127:
			raise strumline.errors.UnknownInstrument(f"Unknown MIDI instrument: {name}")
		return number

	try:
		return _PATCHES[_normalise(name)]
	except KeyError:
		raise strumline.errors.UnknownInstrument(f"Unknown MIDI instrument: {name!r}") from None


def percussion_to_voice (name: typing.Union[str, int]) -> int:

	"""
	Convert a General MIDI percussion name (or key number) to a key number.
	"""

	if isinstance(name, int):
		if not 0 <= name <= 127:
			raise strumline.errors.UnknownPercussion(f"Unknown percussion instrument: {name}")
		return name

	try:
		return _PERCUSSION[_normalise(name)]
	except KeyError:
		raise strumline.errors.UnknownPercussion(f"Unknown percussion instrument: {name!r}") from None


def resolve_strings (strings: typing.Union[str, typing.Sequence[typing.Union[str, int]]], percussion: bool = False) -> typing.List[int]:

	"""
	Resolve a tuning (or drum list) to root pitches, lowest string first.

	A plain string is split on whitespace for tunings (``"E2 A2 D3 G3 B3 E4"``).
	Percussion names contain spaces, so a percussion list must be given as a
	sequence, or as a single name.
	"""

	if isinstance(strings, str):
		items: typing.Sequence[typing.Union[str, int]] = [strings] if percussion else strings.split()
	else:
		items = strings

	resolve = percussion_to_voice if percussion else note_to_pitch
	roots = [resolve(item) for item in items]

	if not roots:
		raise strumline.errors.ConfigurationError("At least one string (or percussion instrument) is required")

	return roots
