"""Compile pluck and strum specs into reusable patterns.

A spec is one line of a small mini-language describing what happens at one
point in a measure::

    <offset> [<displacement>] <strings>:<velocity> ...

- ``offset`` is the 1-relative beat position (``1`` is the downbeat,
  ``2.5`` is halfway through the second beat).
- ``displacement`` (strum only) is the distance in beats between successive
  strikes, as a decimal or a fraction (``3/6``).  A negative displacement
  strikes the strings in reverse order.  Zero strikes them together.
- ``strings`` counts from the highest string (``1``) down, as a single
  number, a range (``2-4`` or ``4-2``) or a comma list (``5,1``).
- ``velocity`` of ``0`` mutes the strings instead of striking them.

Example:
	```python
	# Bass note on one, the top three strings together on two and three.
	pluck = strumline.pattern.compile_pluck(["1 5:80", "2 1-3:70", "3 1-3:70"])

	# Downstroke over the whole chord, an eighth of a beat between strings.
	strum = strumline.pattern.compile_strum(["1 -1/8 1-6:90"])
	```
"""

import dataclasses
import fractions
import logging
import re
import typing

import strumline.errors


logger = logging.getLogger(__name__)

_STRUM_RE = re.compile(
	r"""
	^ (\d+(?:\.\d+)?)              # beat offset, 1-relative
	\s+
	([-+]?\d+(?:\.\d+|/\d+)?)      # strum displacement
	\s+
	(.*)                           # actions
	$
	""",
	re.VERBOSE
)

_PLUCK_RE = re.compile(r"^(\d+(?:\.\d+)?)\s+(.*)$")

_ACTION_RE = re.compile(r"^([-\d,]+):(\d+)$")

_RANGE_ITEM_RE = re.compile(r"^(\d+)(?:-(\d+))?$")


Action = typing.Tuple[int, int]


@dataclasses.dataclass(frozen=True)
class ActionGroup:

	"""
	Strikes that happen together at one beat offset.

	Each action is ``(string_from_high, velocity)``.
	"""

	offset: fractions.Fraction
	actions: typing.Tuple[Action, ...]


@dataclasses.dataclass(frozen=True)
class Pattern:

	"""
	An immutable, compiled pluck or strum pattern.

	Groups keep the order they were generated in, which is the order the
	strings are struck.  A pattern holds no instrument state, so one pattern
	can be played against any number of chords and instruments.
	"""

	groups: typing.Tuple[ActionGroup, ...] = ()

	def __iter__ (self) -> typing.Iterator[ActionGroup]:
		return iter(self.groups)

	def __len__ (self) -> int:
		return len(self.groups)

	@property
	def last_offset (self) -> fractions.Fraction:

		"""The latest beat offset used by the pattern (1 for an empty pattern)."""

		if not self.groups:
			return fractions.Fraction(1)

		return max(group.offset for group in self.groups)


def string_range (text: str) -> typing.List[int]:

	"""
	Expand a string selection into string numbers, in strike order.

	``"2-4"`` gives ``[2, 3, 4]``, ``"4-2"`` gives ``[4, 3, 2]`` and
	``"5,1"`` gives ``[5, 1]``.
	"""

	strings: typing.List[int] = []

	for item in re.split(r",\s*", text):

		match = _RANGE_ITEM_RE.match(item)

		if match is None:
			raise strumline.errors.ParseError(f"Range error: {text}")

		first = int(match.group(1))
		last = int(match.group(2)) if match.group(2) is not None else first

		if first < 1 or last < 1:
			raise strumline.errors.ParseError(f"Strings are numbered from 1: {text}")

		if last >= first:
			strings.extend(range(first, last + 1))
		else:
			strings.extend(range(first, last - 1, -1))

	return strings


def parse_displacement (text: str) -> fractions.Fraction:

	"""
	Parse a strum displacement, given as a decimal (``0.25``) or a fraction (``-1/8``).
	"""

	try:
		return fractions.Fraction(text)
	except (ValueError, ZeroDivisionError):
		raise strumline.errors.ParseError(f"Invalid strum displacement: {text}") from None


def _compile_spec (spec: str, groups: typing.List[ActionGroup]) -> None:

	match = _STRUM_RE.match(spec.strip())

	if match is None:
		raise strumline.errors.ParseError(f"Invalid strum pattern: {spec}")

	offset = fractions.Fraction(match.group(1))
	displacement = parse_displacement(match.group(2))
	tokens = match.group(3).split()

	if not tokens:
		raise strumline.errors.ParseError(f"Invalid strum pattern: {spec}")

	for token in tokens:

		action = _ACTION_RE.match(token)

		if action is None:
			raise strumline.errors.ParseError(f"Invalid strum action: {token} (in {spec!r})")

		velocity = int(action.group(2))
		strikes = [(string, velocity) for string in string_range(action.group(1))]

		if displacement < 0:
			strikes.reverse()

		if displacement:
			# Each strike gets its own group, and the offset keeps advancing
			# into the next token.
			for strike in strikes:
				groups.append(ActionGroup(offset=offset, actions=(strike,)))
				offset += abs(displacement)
		else:
			groups.append(ActionGroup(offset=offset, actions=tuple(strikes)))


def compile_strum (specs: typing.Union[str, typing.Sequence[str]]) -> Pattern:

	"""
	Compile strum specs (``"<offset> <displacement> <actions>..."``) into a Pattern.

	Parameters:
		specs: One spec or a sequence of specs, compiled in order.

	Raises:
		ParseError: A spec, action or string range is malformed.
	"""

	if isinstance(specs, str):
		specs = [specs]

	groups: typing.List[ActionGroup] = []

	for spec in specs:
		_compile_spec(spec, groups)

	pattern = Pattern(groups=tuple(groups))
	logger.debug(f"Compiled {len(specs)} spec(s) into {len(pattern)} action group(s)")

	return pattern


def compile_pluck (specs: typing.Union[str, typing.Sequence[str]]) -> Pattern:

	"""
	Compile pluck specs (``"<offset> <actions>..."``) into a Pattern.

	A pluck is a strum with zero displacement: all strings named in one action
	sound together.
	"""

	if isinstance(specs, str):
		specs = [specs]

	rewritten: typing.List[str] = []

	for spec in specs:

		match = _PLUCK_RE.match(spec.strip())

		if match is None:
			raise strumline.errors.ParseError(f"Invalid pluck pattern: {spec}")

		rewritten.append(f"{match.group(1)} 0 {match.group(2)}")

	return compile_strum(rewritten)
