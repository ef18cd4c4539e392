"""General MIDI Level 1 percussion key map.

Standard MIDI percussion assignments for channel 10 (0-indexed channel 9).
A percussion instrument uses these voices in place of string tunings: each
"string" is one drum, and its root pitch is the drum's key number.

Two ways to use this module:

1. **By name** - the ``strings`` of a percussion instrument are looked up in
   ``GM_PERCUSSION_MAP``, using the names printed in the GM specification::

       strumline.percussion(strings=["Closed Hi-Hat", "Acoustic Snare", "Acoustic Bass Drum"])

2. **As constants** - pass key numbers directly::

       import strumline.constants.gm_percussion as gm

       strumline.percussion(strings=[gm.CLOSED_HI_HAT, gm.ACOUSTIC_SNARE, gm.ACOUSTIC_BASS_DRUM])
"""

import typing


# ─── Individual key constants ────────────────────────────────────────

ACOUSTIC_BASS_DRUM = 35
BASS_DRUM_1 = 36
SIDE_STICK = 37
ACOUSTIC_SNARE = 38
HAND_CLAP = 39
ELECTRIC_SNARE = 40
LOW_FLOOR_TOM = 41
CLOSED_HI_HAT = 42
HIGH_FLOOR_TOM = 43
PEDAL_HI_HAT = 44
LOW_TOM = 45
OPEN_HI_HAT = 46
LOW_MID_TOM = 47
HI_MID_TOM = 48
CRASH_CYMBAL_1 = 49
HIGH_TOM = 50
RIDE_CYMBAL_1 = 51
CHINESE_CYMBAL = 52
RIDE_BELL = 53
TAMBOURINE = 54
SPLASH_CYMBAL = 55
COWBELL = 56
CRASH_CYMBAL_2 = 57
VIBRASLAP = 58
RIDE_CYMBAL_2 = 59
HI_BONGO = 60
LOW_BONGO = 61
MUTE_HI_CONGA = 62
OPEN_HI_CONGA = 63
LOW_CONGA = 64
HIGH_TIMBALE = 65
LOW_TIMBALE = 66
HIGH_AGOGO = 67
LOW_AGOGO = 68
CABASA = 69
MARACAS = 70
SHORT_WHISTLE = 71
LONG_WHISTLE = 72
SHORT_GUIRO = 73
LONG_GUIRO = 74
CLAVES = 75
HI_WOOD_BLOCK = 76
LOW_WOOD_BLOCK = 77
MUTE_CUICA = 78
OPEN_CUICA = 79
MUTE_TRIANGLE = 80
OPEN_TRIANGLE = 81


# ─── Name map ────────────────────────────────────────────────────────
#
# Keys are the GM names as printed; lookups in strumline.names are
# case-insensitive.

GM_PERCUSSION_MAP: typing.Dict[str, int] = {
	"Acoustic Bass Drum": ACOUSTIC_BASS_DRUM,
	"Bass Drum 1": BASS_DRUM_1,
	"Side Stick": SIDE_STICK,
	"Acoustic Snare": ACOUSTIC_SNARE,
	"Hand Clap": HAND_CLAP,
	"Electric Snare": ELECTRIC_SNARE,
	"Low Floor Tom": LOW_FLOOR_TOM,
	"Closed Hi-Hat": CLOSED_HI_HAT,
	"High Floor Tom": HIGH_FLOOR_TOM,
	"Pedal Hi-Hat": PEDAL_HI_HAT,
	"Low Tom": LOW_TOM,
	"Open Hi-Hat": OPEN_HI_HAT,
	"Low-Mid Tom": LOW_MID_TOM,
	"Hi-Mid Tom": HI_MID_TOM,
	"Crash Cymbal 1": CRASH_CYMBAL_1,
	"High Tom": HIGH_TOM,
	"Ride Cymbal 1": RIDE_CYMBAL_1,
	"Chinese Cymbal": CHINESE_CYMBAL,
	"Ride Bell": RIDE_BELL,
	"Tambourine": TAMBOURINE,
	"Splash Cymbal": SPLASH_CYMBAL,
	"Cowbell": COWBELL,
	"Crash Cymbal 2": CRASH_CYMBAL_2,
	"Vibraslap": VIBRASLAP,
	"Ride Cymbal 2": RIDE_CYMBAL_2,
	"Hi Bongo": HI_BONGO,
	"Low Bongo": LOW_BONGO,
	"Mute Hi Conga": MUTE_HI_CONGA,
	"Open Hi Conga": OPEN_HI_CONGA,
	"Low Conga": LOW_CONGA,
	"High Timbale": HIGH_TIMBALE,
	"Low Timbale": LOW_TIMBALE,
	"High Agogo": HIGH_AGOGO,
	"Low Agogo": LOW_AGOGO,
	"Cabasa": CABASA,
	"Maracas": MARACAS,
	"Short Whistle": SHORT_WHISTLE,
	"Long Whistle": LONG_WHISTLE,
	"Short Guiro": SHORT_GUIRO,
	"Long Guiro": LONG_GUIRO,
	"Claves": CLAVES,
	"Hi Wood Block": HI_WOOD_BLOCK,
	"Low Wood Block": LOW_WOOD_BLOCK,
	"Mute Cuica": MUTE_CUICA,
	"Open Cuica": OPEN_CUICA,
	"Mute Triangle": MUTE_TRIANGLE,
	"Open Triangle": OPEN_TRIANGLE,
}
