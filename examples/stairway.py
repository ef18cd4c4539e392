import logging
import re

import strumline

logging.basicConfig(level=logging.INFO)

# Playing tabs copied from the web.  Downloaded tabs come in many dialects,
# so they are first massaged into the plain grid strumline reads.

def cleanup (tab: str) -> str:

	"""
	Turn leading string names into a bar, drop the dash after each bar and
	flatten slides and bends.
	"""

	tab = re.sub(r"^[ \t]*[EADGB]-", "|-", tab, flags=re.IGNORECASE | re.MULTILINE)
	tab = tab.replace("|-", "|")

	return re.sub(r"[/^]", "-", tab)


guitar = strumline.guitar(signature="4/4", bpm=80, midi="stairway.mid")

guitar.tab(4, cleanup("""
	E-------5-7-----7-|-8-----8-2-----2-|-0---------0-----|-----------------|
	B-----5-----5-----|---5-------3-----|---1---1-----1---|---1-1-----------|
	G---5---------5---|-----5-------2---|-----2---------2-|-0-2-2-----------|
	D-7-------6-------|-5-------4-------|-3---------------|-----------------|
	A-----------------|-----------------|-----------------|-2-0-0---0--/8-7-|
	E-----------------|-----------------|-----------------|-----------------|
"""))

guitar.tab(4, cleanup("""
	E---------7-----7-|-8-----8-2-----2-|-0---------0-----|-----------------|
	B-------5---5-----|---5-------3-----|---1---1-----1---|---1-1-----------|
	G-----5-------5---|-----5-------2---|-----2---------2-|-0-2-2-----------|
	D---7-----6-------|-5-------4-------|-3---------------|-----------------|
	A-0---------------|-----------------|-----------------|-2-0-0-------0-2-|
	E-----------------|-----------------|-----------------|-----------------|
"""))

guitar.tab(4, cleanup("""
	E-------0-2-----2-|-0-----0---------|---------3-----3-|-3^2-2-2---------|
	B-----------3-----|---1-----0-------|-1-----1---0-----|-----3-3---------|
	G-----0-------2---|-----2-----2-----|---0---------0---|-----------------|
	D---2-----0-------|-3---------------|-----2-----------|-0---0-0---------|
	A-3---------------|---------0---0-2-|-3---------------|-------------0-2-|
	E-----------------|-----------------|---------3-------|-----------------|
"""))

guitar.tab(4, cleanup("""
	E---------2-----2-|-0-----0---------|---------------2-|-0-0-0-----------|
	B-------1---3-----|---1-----0-------|-------1-----3---|-1-1-1-----------|
	G-----0-------2---|-----2-----2-----|-----0-----2-----|-2-2-2-----------|
	D---2-----0-------|-3---------------|---2-----0-------|-3-3-3-----------|
	A-3---------------|---------0---0-2-|-3---------------|-----------------|
	E-----------------|-----------------|-----------------|-----------------|
"""))

guitar.rest(2)
guitar.finish()
