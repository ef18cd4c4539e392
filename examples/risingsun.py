import logging

import strumline

logging.basicConfig(level=logging.INFO)

# The arpeggio made famous by the Animals' House of the Rising Sun: the
# first 16 bars, the rest of the song repeats them.

guitar = strumline.guitar(
	signature = "6/8",
	bpm = 240,
	instrument = "Electric Guitar(clean)",
	rtime = 10,
	rvol = 5,
	seed = 1964,
	midi = "risingsun.mid"
)

Am = "0 0 2 2 1 0"
C  = "0 3 2 0 1 0"
D  = "- - 0 2 3 2"
F  = "1 3 3 2 1 1"
E  = "0 2 2 1 0 0"

# The offsets are deliberately imprecise, so these are plucks rather than strums.
# Each bass note mutes the other bass strings so they don't ring into the next chord.
ARPEGGIO = ("2.1  4:80", "2.8  3:80", "3.2  2:80", "4.0  1:90", "5.0  2:80", "6.0  3:80")

bass_a = guitar.pluck("1.0  5:90  4,6:0", *ARPEGGIO)
bass_d = guitar.pluck("1.0  4:90  5,6:0", *ARPEGGIO)
bass_e = guitar.pluck("1.0  6:90  4,5:0", *ARPEGGIO)

with guitar:

	guitar.play(bass_a, Am, C)
	guitar.play(bass_d, D, F)

	guitar.play(bass_a, Am, C)
	guitar.play(bass_e, E, E)

	guitar.play(bass_a, Am, C)
	guitar.play(bass_d, D, F)

	guitar.play(bass_a, Am)
	guitar.play(bass_e, E)
	guitar.play(bass_a, Am)
	guitar.play(bass_e, E)

	# Let the strings ring out.
	guitar.rest(2)
