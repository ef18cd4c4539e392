"""
strumline - plucked, strummed and drummed MIDI from a few lines of text.

strumline turns short textual descriptions of how a guitar (or any set of
tuned strings, or a drum kit) is played into a Standard MIDI File.  You
describe *when* strings are struck with a pattern, *which* frets are held
with a chord, and strumline keeps track of what is still ringing, when each
string has to stop, and where in time the performance has got to.

What it does:

- **Pluck and strum patterns.** ``"1 5:80"`` plucks the fifth string on the
  downbeat; ``"1 1/8 6-1:90"`` strums across all six, an eighth of a beat
  apart.  Patterns compile once and play against any chord.
- **Sustain that behaves like a string.** A note rings until its string is
  struck again or muted; velocity 0 mutes without striking.
- **Tabs.** Play a plain ASCII tab grid directly, for guitars or drums.
- **Feel.** Time and velocity randomization, crescendos and decrescendos,
  ritardandos and accelerandos.
- **Several voices.** Auxiliary instruments on their own channels, finished
  into one multi-track file together with an optional metronome.

Minimal example:

    ```python
    import strumline

    guitar = strumline.guitar(signature="6/8", bpm=240, midi="risingsun.mid")

    pattern = guitar.pluck("1.0 5:90 4,6:0", "2.1 4:80", "2.8 3:80", "3.2 2:80",
                           "4.0 1:90", "5.0 2:80", "6.0 3:80")

    guitar.play(pattern, "0 0 2 2 1 0", "0 3 2 0 1 0")
    guitar.rest(2)
    guitar.finish()
    ```

Package-level exports: ``Instrument``, ``InstrumentConfig``, ``Pattern``,
``compile_pluck``, ``compile_strum``, ``guitar``, ``percussion`` and the
error classes.
"""

import typing

import strumline.config
import strumline.errors
import strumline.instrument
import strumline.pattern


Instrument = strumline.instrument.Instrument
InstrumentConfig = strumline.config.InstrumentConfig
Pattern = strumline.pattern.Pattern
compile_pluck = strumline.pattern.compile_pluck
compile_strum = strumline.pattern.compile_strum

StrumlineError = strumline.errors.StrumlineError
ParseError = strumline.errors.ParseError
ConfigurationError = strumline.errors.ConfigurationError
FormatError = strumline.errors.FormatError
TimingError = strumline.errors.TimingError


def guitar (**options: typing.Any) -> Instrument:

	"""A melodic instrument; six-string standard tuning and nylon guitar by default."""

	return Instrument(**options)


def percussion (**options: typing.Any) -> Instrument:

	"""A percussion instrument on the drum channel; ``strings`` names the drums, bottom tab line first."""

	options.setdefault("percussion", True)

	return Instrument(**options)
