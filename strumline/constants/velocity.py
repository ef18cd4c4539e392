"""MIDI velocity constants.

Velocity is the MIDI attack strength (0-127).  Pattern specs carry their own
velocities; tab grids do not, so they use the fixed bases below.
"""

# Every fret digit in a melodic tab strikes at this velocity.
TAB_VELOCITY = 80

# Percussion tab digits scale this base: digit 9 = full, 0 = mute.
PERCUSSION_TAB_VELOCITY = 100
PERCUSSION_TAB_STEPS = 9

METRONOME_VELOCITY = 70

# A note-on with velocity 0 means note-off, so a scaled strike never goes below 1.
MIN_VELOCITY = 1
MAX_VELOCITY = 127
