"""Render a YAML score.

A score names an instrument, its patterns and chords, and lists what is
played in order::

    instrument:
      signature: 6/8
      bpm: 240
      instrument: Electric Guitar(clean)

    patterns:
      bass_a:
        pluck: ["1.0 5:90 4,6:0", "2.1 4:80", "2.8 3:80", "3.2 2:80"]

    chords:
      Am: 0 0 2 2 1 0
      C:  0 3 2 0 1 0

    score:
      - play: [bass_a, Am, C]
      - cresc: [0.6, 2]
      - play: [bass_a, Am, C]
      - rest: 2

Steps are ``play`` (a pattern name followed by chords, which are looked up
in ``chords`` or used as literal chord specs), ``rest`` (measures),
``tab`` (text, with an optional ``beats`` key), ``cresc`` and ``rit``
(``[factor, measures]``) and ``tempo`` (BPM).
"""

import logging
import typing

import mido

import strumline.errors
import strumline.instrument
import strumline.pattern


logger = logging.getLogger(__name__)


def compile_patterns (patterns: typing.Mapping[str, typing.Any]) -> typing.Dict[str, strumline.pattern.Pattern]:

	"""Compile every ``{pluck: [...]}`` or ``{strum: [...]}`` entry."""

	compiled: typing.Dict[str, strumline.pattern.Pattern] = {}

	for name, definition in patterns.items():

		if not isinstance(definition, dict) or len(definition) != 1:
			raise strumline.errors.ConfigurationError(f"Pattern {name!r} must be a mapping with one 'pluck' or 'strum' key")

		kind, specs = next(iter(definition.items()))

		if kind == "pluck":
			compiled[name] = strumline.pattern.compile_pluck(specs)
		elif kind == "strum":
			compiled[name] = strumline.pattern.compile_strum(specs)
		else:
			raise strumline.errors.ConfigurationError(f"Pattern {name!r}: unknown kind {kind!r}")

	return compiled


def _ramp_arguments (step: str, value: typing.Any) -> typing.Tuple[float, int]:

	if isinstance(value, (int, float)):
		return float(value), 1

	if isinstance(value, list) and len(value) == 2:
		return float(value[0]), int(value[1])

	raise strumline.errors.ConfigurationError(f"{step} takes [factor, measures]: {value!r}")


def perform (instrument: strumline.instrument.Instrument, score: typing.Mapping[str, typing.Any]) -> None:

	"""
	Play the ``score`` steps of a score document on *instrument*.
	"""

	patterns = compile_patterns(score.get("patterns") or {})
	chords: typing.Mapping[str, typing.Any] = score.get("chords") or {}

	for number, step in enumerate(score.get("score") or [], 1):

		if not isinstance(step, dict):
			raise strumline.errors.ConfigurationError(f"Score step {number} must be a mapping: {step!r}")

		if "play" in step:
			entries = step["play"]
			if isinstance(entries, str):
				entries = [entries]
			if not entries:
				instrument.play()
				continue
			name, *played = entries
			if name not in patterns:
				raise strumline.errors.ConfigurationError(f"Score step {number}: unknown pattern {name!r}")
			instrument.play(patterns[name], *[chords.get(chord, chord) if isinstance(chord, str) else chord for chord in played])

		elif "rest" in step:
			instrument.rest(int(step["rest"] or 1))

		elif "tab" in step:
			instrument.tab(step["tab"], beats=step.get("beats"))

		elif "cresc" in step:
			instrument.cresc(*_ramp_arguments("cresc", step["cresc"]), shape=step.get("shape", "linear"))

		elif "rit" in step:
			instrument.rit(*_ramp_arguments("rit", step["rit"]), shape=step.get("shape", "linear"))

		elif "tempo" in step:
			instrument.tempo(float(step["tempo"]))

		else:
			raise strumline.errors.ConfigurationError(f"Score step {number}: unknown step {step!r}")


def render (score: typing.Mapping[str, typing.Any], midi: typing.Optional[str] = None, seed: typing.Optional[int] = None) -> typing.Optional[mido.MidiFile]:

	"""
	Build the instrument described by a score document, play it and finish it.

	Parameters:
		score: The parsed score document.
		midi: Output file, overriding the score's ``instrument.midi``.
		seed: Random seed, overriding the score's ``instrument.seed``.
	"""

	options = dict(score.get("instrument") or {})

	if seed is not None:
		options["seed"] = seed

	instrument = strumline.instrument.Instrument(**options)
	perform(instrument, score)

	return instrument.finish(midi=midi)
