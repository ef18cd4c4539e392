import logging

import strumline

logging.basicConfig(level=logging.INFO)

# A guitar with a drum kit as auxiliary instrument, plus a four beat lead-in
# with a metronome.  The drum tab reads from the default kit: closed hi-hat
# at the top, bass drum at the bottom.

guitar = strumline.guitar(bpm=80, lead=4, midi="drums.mid")
drums = guitar.aux(percussion=True, name="Drums")

# A second kit voice played from patterns rather than a tab.  Strings are
# counted from the last drum, so string 1 is the bass drum.
toms = guitar.aux(
	percussion = True,
	name = "Toms",
	strings = ["Low Tom", "Low-Mid Tom", "High Tom", "Acoustic Bass Drum"]
)

strum = guitar.strum("1 1/8 6-1:80")
fill = toms.pluck("1.0  1:90", "3.0  4:70", "3.5  3:70", "4.0  2:80", "4.5  2:80")

drums.tab(
	"Cl HH |---7--7-7-7-7---|-7-7--7-7-7-7-7-|-7-7--7-7-7-7-7-|-7-7--7-7-7-7-7-|",
	"Pd HH |--------------7-|----------------|----------------|----------------|",
	"Crash |-7--------------|----------------|----------------|----------------|",
	"Kick  |7---------------|7---------------|7---------------|7---------------|"
)

guitar.play(strum, "0 2 2 1 0 0", "0 0 2 2 1 0", "0 3 2 0 1 0", "0 2 2 1 0 0")

toms.rest(3)
toms.play(fill, "0 0 0 0")

guitar.rest(2)
guitar.finish()
