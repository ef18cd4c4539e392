import argparse
import logging
import sys
import typing

import strumline.config
import strumline.errors
import strumline.score


logger = logging.getLogger(__name__)


def main (argv: typing.Optional[typing.Sequence[str]] = None) -> int:

	"""
	Render a YAML score to a MIDI file.
	"""

	parser = argparse.ArgumentParser(prog="strumline", description="Render a strumline YAML score to a MIDI file.")
	parser.add_argument("score", help="YAML score file")
	parser.add_argument("-o", "--output", help="MIDI file to write (default: the score's instrument.midi, or the score name with .mid)")
	parser.add_argument("-s", "--seed", type=int, help="seed for time and velocity randomization")
	parser.add_argument("-v", "--verbose", action="store_true", help="log every measure")

	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	try:
		score = strumline.config.load_config(args.score)

		output = args.output

		if output is None and not (score.get("instrument") or {}).get("midi"):
			output = args.score.rsplit(".", 1)[0] + ".mid"

		strumline.score.render(score, midi=output, seed=args.seed)

	except strumline.errors.StrumlineError as e:
		logger.error(str(e))
		return 1

	return 0


if __name__ == "__main__":
	sys.exit(main())
