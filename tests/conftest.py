import random

import pytest

import strumline
import strumline.events


@pytest.fixture
def guitar () -> strumline.Instrument:

	"""A default six-string guitar, 4/4 at 100 BPM, no randomization."""

	return strumline.Instrument(attribution=False)


@pytest.fixture
def seeded_rng () -> random.Random:

	"""A deterministic random source for randomized paths."""

	return random.Random(1234)


def note_events (instrument: strumline.Instrument, kind: str = "note_on") -> list:

	"""Return ``(tick, pitch, velocity)`` for the instrument's events of one kind."""

	return [(e.tick, e.pitch, e.velocity) for e in instrument.events if e.kind == kind]
