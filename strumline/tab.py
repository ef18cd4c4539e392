"""Tab grids and the strategies that turn a grid cell into a note.

A tab grid has one line per string (or drum), highest string at the top.
Each character is one time slot, ``|`` separates measures, ``-`` is
silence and a digit is a strike::

    |-------5-7-----7-|-8-----8-2-----2-|
    |-----5-----5-----|---5-------3-----|
    |---5---------5---|-----5-------2---|
    |-7-------6-------|-5-------4-------|
    |-----------------|-----------------|
    |-----------------|-----------------|

Anything before the first ``|`` that is not grid text is a label and is
ignored (``Kick  |7---|``).  The number of characters in a measure sets the
grid resolution: a measure spans ``beats`` beats, so each character lasts
``ticks_per_beat * beats / width`` ticks, which must be a whole number.

For melodic instruments a digit is a fret, for percussion it is how hard the
drum is hit (0 mutes, 9 is loudest).
"""

import dataclasses
import logging
import re
import typing

import strumline.constants.velocity
import strumline.errors


logger = logging.getLogger(__name__)

_CELLS_RE = re.compile(r"^[-\d]+$")


@dataclasses.dataclass(frozen=True)
class TabGrid:

	"""
	A validated tab grid with the bar lines removed.

	``rows`` are the lines top to bottom; ``steps`` holds the length in ticks
	of each column.
	"""

	rows: typing.Tuple[str, ...]
	steps: typing.Tuple[int, ...]

	def columns (self) -> typing.Iterator[typing.Tuple[int, typing.Tuple[str, ...]]]:

		"""Yield ``(step_ticks, cells)`` for each column, cells top line first."""

		for index, step in enumerate(self.steps):
			yield step, tuple(row[index] for row in self.rows)

	@property
	def total_ticks (self) -> int:
		return sum(self.steps)


def split_lines (tab: typing.Union[str, typing.Sequence[str]]) -> typing.List[str]:

	"""Split tab text into non-blank, stripped lines."""

	if isinstance(tab, str):
		tab = tab.splitlines()

	return [line.strip() for line in tab if line.strip()]


def _measures (line: str) -> typing.List[str]:

	head, bar, rest = line.partition("|")

	if not bar:
		raise strumline.errors.ParseError(f"Tab format error: {line}")

	# A leading chunk of grid text is the first measure, anything else is a label.
	cells = head.strip()
	body = rest if cells and not _CELLS_RE.match(cells) else f"{cells}|{rest}"

	measures = body.split("|")

	if measures and measures[0] == "":
		measures.pop(0)

	if measures and measures[-1].strip() == "":
		measures.pop()

	if not measures:
		raise strumline.errors.ParseError(f"Tab format error: {line}")

	for measure in measures:
		if not _CELLS_RE.match(measure):
			raise strumline.errors.ParseError(f"Tab format error: {line}")

	return measures


def parse_grid (tab: typing.Union[str, typing.Sequence[str]], string_count: int, ticks_per_beat: int, beats: int, uniform: bool = True) -> TabGrid:

	"""
	Validate tab text and reduce it to a grid.

	Parameters:
		tab: Multi-line text, or a sequence of lines.
		string_count: Number of lines required.
		ticks_per_beat: Tick resolution.
		beats: Beats spanned by one measure of the grid.
		uniform: Require every measure to have the same width.

	Raises:
		ConfigurationError: Wrong number of lines.
		ParseError: A line is not grid text.
		FormatError: Measures are misaligned, not uniform, or do not divide
			into whole ticks.
	"""

	lines = split_lines(tab)

	if len(lines) != string_count:
		raise strumline.errors.ConfigurationError(f"Number of tab lines must be {string_count}, got {len(lines)}")

	if beats <= 0:
		raise strumline.errors.ConfigurationError(f"Beats per tab measure must be positive: {beats}")

	measures = [_measures(line) for line in lines]
	widths = [len(measure) for measure in measures[0]]

	for line, row in zip(lines, measures):
		if [len(measure) for measure in row] != widths:
			raise strumline.errors.FormatError(f"Tab format error, measures do not line up: {line}")

	if uniform and len(set(widths)) > 1:
		raise strumline.errors.FormatError(f"Tab format error, measures differ in size: {lines[0]}")

	steps: typing.List[int] = []

	for width in widths:

		if (ticks_per_beat * beats) % width:
			raise strumline.errors.FormatError(f"Strange measure size {width}: {lines[0]}")

		steps.extend([ticks_per_beat * beats // width] * width)

	return TabGrid(
		rows = tuple("".join(row) for row in measures),
		steps = tuple(steps)
	)


class MelodicStrikes:

	"""
	Strings with a pitch: a digit is a fret, every strike closes the note
	already sounding on that string.
	"""

	percussion = False
	closes_sounding = True
	uniform_tabs = True

	def strike (self, root: int, digit: int) -> typing.Tuple[int, int]:

		"""Return ``(pitch, velocity)`` for a tab digit on a string tuned to *root*."""

		return root + digit, strumline.constants.velocity.TAB_VELOCITY


class PercussionStrikes:

	"""
	Drums: a digit is the force of the hit, the pitch is always the drum's
	voice, and hits are instantaneous so nothing is closed before a new hit.
	"""

	percussion = True
	closes_sounding = False
	uniform_tabs = False

	def strike (self, root: int, digit: int) -> typing.Tuple[int, int]:

		velocity = int(strumline.constants.velocity.PERCUSSION_TAB_VELOCITY * digit / strumline.constants.velocity.PERCUSSION_TAB_STEPS)

		return root, velocity


Strikes = typing.Union[MelodicStrikes, PercussionStrikes]


def strikes_for (percussion: bool) -> Strikes:
	return PercussionStrikes() if percussion else MelodicStrikes()
