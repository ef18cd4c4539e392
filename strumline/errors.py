class StrumlineError (Exception):

	"""
	Base class for every error raised by strumline.
	"""


class ParseError (StrumlineError, ValueError):

	"""
	A pluck, strum or tab spec could not be parsed.

	The message always echoes the offending fragment.
	"""


class ConfigurationError (StrumlineError, ValueError):

	"""
	Invalid instrument configuration or call arguments.
	"""


class UnknownNote (ConfigurationError):
	pass


class UnknownInstrument (ConfigurationError):
	pass


class UnknownPercussion (ConfigurationError):
	pass


class FormatError (StrumlineError, ValueError):

	"""
	A tab grid is not a uniform grid, or its measure width does not divide the tick resolution.
	"""


class TimingError (StrumlineError, ValueError):

	"""
	An event list went backwards in time while converting to delta time.

	This is a sequencing bug (or a manual tick placed before an earlier event)
	and is never corrected silently.
	"""
