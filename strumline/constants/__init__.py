"""Constants for strumline.

- ``strumline.constants.velocity`` - velocity bases for tabs and the metronome
- ``strumline.constants.gm_instruments`` - General MIDI program names
- ``strumline.constants.gm_percussion`` - General MIDI percussion key map (channel 10)

Timing constants live here directly.  The engine counts time in **ticks**,
with 192 ticks per beat by default, which divides evenly into quarter,
eighth, sixteenth and triplet grids.
"""

TICKS_PER_BEAT = 192

# 0-indexed MIDI channel 9 is GM channel 10, reserved for drums.
PERCUSSION_CHANNEL = 9
MAX_CHANNEL = 15

MAX_VOLUME = 1.5
MAX_RTIME = 10
MAX_RVOL = 6

# Standard kit.
DEFAULT_DRUM_KIT = 0

# Metronome voice (GM side stick) and the length of each click in ticks.
METRONOME_NOTE = 37
METRONOME_CLICK_TICKS = 1

DEFAULT_SIGNATURE = "4/4"
DEFAULT_BPM = 100
DEFAULT_INSTRUMENT = "Acoustic Guitar(nylon)"
DEFAULT_TUNING = "E2 A2 D3 G3 B3 E4"
# Lowest "string" first, like a tuning: the bottom line of a drum tab is the first entry.
DEFAULT_PERCUSSION = ("Acoustic Bass Drum", "Crash Cymbal 1", "Pedal Hi-Hat", "Closed Hi-Hat")

# Text event placed at the start of the control track unless suppressed.
ATTRIBUTION = "Created with strumline"

METRONOME_TRACK_NAME = "Metronome"
