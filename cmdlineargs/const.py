VERSION = (1, 0, 0)
VERSION_STR = f"{VERSION[0]}.{VERSION[1]}.{VERSION[2]}{'-' +  str(VERSION[-1]) if len(VERSION) > 3 else ''}"

ARGV0 = "cmdlineargs"
DESCRIPTION = "Typed flags, parameters and delimited lists pulled straight out of argv"

# Short name meaning "no short name"
NO_SHORT_NAME = " "

LONG_PREFIX = "--"
SHORT_PREFIX = "-"
EQUALS = "="

DEFAULT_SEPARATOR = ","
DEFAULT_JOINER = ","

USAGE_INTRO_SUFFIX = "Options are:"
USAGE_INDENT = 4
USAGE_MARGIN = 5
