import sys
import logging

from typing import Any, Optional
from cmdlineargs import const, usage, utils, values

_logger = logging.getLogger(__name__)

# --- Errors ----------------------------------------------------------------- #


class CmdLineError(RuntimeError):
    """
    Base class of every error raised while pulling options out of argv.

    The message always starts with a newline followed by "Error: ".
    """

    def __init__(self, message: str, option: Optional[str] = None):
        super().__init__(f"\nError: {message}")
        self.option = option


class MissingValueError(CmdLineError):
    def __init__(self, option: str):
        super().__init__(f"parameter {option} is not followed by a value", option)


class InvalidValueError(CmdLineError):
    def __init__(self, option: str, value: str):
        super().__init__(f"parameter {option} is not followed by a correct value", option)
        self.value = value


class ArityMismatchError(CmdLineError):
    def __init__(self, option: str, expected: int, got: int):
        super().__init__(
            f"parameter {option} is not followed by {expected} values as expected",
            option,
        )
        self.expected = expected
        self.got = got


class RemainingArgsError(CmdLineError):
    def __init__(self, tokens: list[str]):
        super().__init__(f"remaining args: {' '.join(tokens)}")
        self.tokens = tokens


class UnparsedOptsError(CmdLineError):
    def __init__(self, tokens: list[str]):
        super().__init__(f"unparsed options: {' '.join(tokens)}")
        self.tokens = tokens


# --- Matching --------------------------------------------------------------- #


def _hasShort(shortName: Optional[str]) -> bool:
    return bool(shortName) and shortName != const.NO_SHORT_NAME


def _longName(longName: str) -> str:
    return const.LONG_PREFIX + longName


def _shortName(shortName: Optional[str]) -> str:
    return const.SHORT_PREFIX + (shortName or "")


def _optionName(longName: str, shortName: Optional[str]) -> str:
    res = _longName(longName)
    if _hasShort(shortName):
        res += f" ({_shortName(shortName)})"
    return res


def findLong(args: list[str], longName: str) -> Optional[int]:
    """
    Finds the first token naming `longName`.

    The part of the token after "--" is compared to `longName` truncated to
    the same length, so `--num` names `numbers` but `--numbersX` does not.

    Returns:
        The index of the token, or None if there is none.
    """
    for i, arg in enumerate(args):
        if len(arg) < 3 or not arg.startswith(const.LONG_PREFIX):
            continue

        suffix = arg[len(const.LONG_PREFIX) :]
        if suffix == longName[: len(suffix)]:
            return i

    return None


def findShort(args: list[str], shortName: Optional[str]) -> Optional[int]:
    """
    Finds the first single-dash token containing `shortName`.

    Short names can be aggregated, `-hv` names both `h` and `v`.

    Returns:
        The index of the token, or None if there is none.
    """
    if not _hasShort(shortName):
        return None

    assert shortName
    for i, arg in enumerate(args):
        if len(arg) < 2 or arg[0] != const.SHORT_PREFIX:
            continue

        if arg[1] == const.SHORT_PREFIX:
            continue

        if shortName in arg[1:]:
            return i

    return None


# --- Argument Store --------------------------------------------------------- #


class CmdLineArgs:
    """
    Pulls typed options out of the argument vector.

    Each `get*` call removes the tokens it recognizes, so what is left at the
    end is what nobody asked for. Each call also records one entry in the
    usage, even when the option is absent.
    """

    _args: list[str]
    _usage: usage.Usage

    def __init__(
        self,
        argv: Optional[list[str]] = None,
        intro: str = "",
        splitOnEquals: bool = True,
    ):
        """
        Args:
            argv: The argument vector, the first element (the program name)
                is discarded. Defaults to `sys.argv`.
            intro: A short summary of what the program does.
            splitOnEquals: When true, `--param=10` is the same as
                `--param 10`. '=' can then not be part of a value.
        """
        if argv is None:
            argv = sys.argv

        self._args = []
        for arg in argv[1:]:
            if splitOnEquals:
                self._args.extend(utils.splitLines(arg, const.EQUALS))
            else:
                self._args.append(arg)

        self._usage = usage.Usage(f"{intro}\n{const.USAGE_INTRO_SUFFIX}")
        _logger.debug(f"Parsing {self._args}")

    def _stripShort(self, pos: int, shortName: str) -> bool:
        """
        Removes `shortName` from the token at `pos`, or the whole token if
        nothing else is left in it.

        Returns:
            True if the token was removed.
        """
        arg = self._args[pos]
        if len(arg) == 2:
            del self._args[pos]
            return True

        idx = arg.index(shortName, 1)
        self._args[pos] = arg[:idx] + arg[idx + 1 :]
        return False

    def _take(self, longName: str, shortName: Optional[str]) -> Optional[int]:
        """
        Consumes the token naming the option and returns the index of the
        token holding its value, or None if the option is absent.
        """
        pos = findLong(self._args, longName)
        if pos is not None:
            if pos + 1 >= len(self._args):
                raise MissingValueError(_longName(longName))

            _logger.debug(f"Found {_longName(longName)} as '{self._args[pos]}'")
            del self._args[pos]
            return pos

        pos = findShort(self._args, shortName)
        if pos is not None:
            assert shortName
            if pos + 1 >= len(self._args):
                raise MissingValueError(_shortName(shortName))

            _logger.debug(f"Found {_shortName(shortName)} in '{self._args[pos]}'")
            if self._stripShort(pos, shortName):
                return pos
            return pos + 1

        return None

    def getParam(
        self,
        longName: str,
        shortName: Optional[str],
        default: Any,
        description: str = "",
        typ: Optional[type] = None,
    ) -> Any:
        """
        Gets a parameter, an option followed by a value.

        Args:
            longName: The long name of the parameter (used as "--name").
            shortName: The short name of the parameter (used as "-n"), or None.
            default: The value returned if the parameter is absent; its type
                is the type of the value unless `typ` is given.
            description: A description of the parameter, for the usage.
            typ: The type of the value, one of bool, int, float or str.

        Returns:
            The value of the parameter.

        Raises:
            MissingValueError: The option is the last token.
            InvalidValueError: The value cannot be parsed.
        """
        typ = typ or values.typeOf(default)
        self._usage.add(longName, shortName, values.render(default), description)

        pos = self._take(longName, shortName)
        if pos is None:
            _logger.debug(f"{_longName(longName)} absent, using {default!r}")
            return default

        token = self._args.pop(pos)
        try:
            return values.parse(token, typ)
        except ValueError as e:
            _logger.debug(f"{_longName(longName)}: {e}")
            raise InvalidValueError(_longName(longName), token) from e

    def getParams(
        self,
        longName: str,
        shortName: Optional[str],
        defaults: list[Any],
        enforceDefaultSize: bool,
        description: str = "",
        separator: str = const.DEFAULT_SEPARATOR,
        typ: Optional[type] = None,
    ) -> list[Any]:
        """
        Gets a parameter holding several values, e.g. "--values 1,2,3".

        Args:
            longName: The long name of the parameter (used as "--name").
            shortName: The short name of the parameter (used as "-n"), or None.
            defaults: The values returned if the parameter is absent.
            enforceDefaultSize: When true, exactly `len(defaults)` values are
                expected. They may be spread over several tokens, and a single
                value is repeated to fill them all.
            description: A description of the parameter, for the usage.
            separator: The character between values, runs of it count as one.
                There is no way to escape it.
            typ: The type of the values, inferred from `defaults` when omitted.

        Returns:
            The values of the parameter.

        Raises:
            MissingValueError: The option is the last token.
            InvalidValueError: A value cannot be parsed.
            ArityMismatchError: The wrong number of values was given.
        """
        typ = typ or values.typeOf(defaults[0] if defaults else None)
        self._usage.add(longName, shortName, values.renderList(defaults), description)

        pos = self._take(longName, shortName)
        if pos is None:
            _logger.debug(f"{_longName(longName)} absent, using {defaults!r}")
            return list(defaults)

        option = _optionName(longName, shortName)
        required = len(defaults)
        res: list[Any] = []
        while True:
            token = self._args.pop(pos)
            try:
                res += values.elements(token, typ, separator)
            except ValueError as e:
                _logger.debug(f"{option}: {e}")
                raise InvalidValueError(option, token) from e

            # strings may hold spaces, they never span more than one token
            if typ is str or not enforceDefaultSize or len(res) >= required:
                break
            if pos >= len(self._args) or self._args[pos].startswith(
                const.SHORT_PREFIX
            ):
                break

        if typ is str and not res:
            _logger.debug(f"{option} holds no value, using {defaults!r}")
            return list(defaults)

        if enforceDefaultSize and len(res) == 1 and required > 1:
            res = res * required

        if enforceDefaultSize and len(res) != required:
            raise ArityMismatchError(option, required, len(res))

        return res

    def getFlag(
        self, longName: str, shortName: Optional[str], description: str = ""
    ) -> int:
        """
        Gets a flag, an option without value.

        Returns:
            The number of times the flag is present, `-vv` counts twice.
        """
        self._usage.add(longName, shortName, "", description)

        count = 0

        pos = findLong(self._args, longName)
        while pos is not None:
            count += 1
            del self._args[pos]
            pos = findLong(self._args, longName)

        pos = findShort(self._args, shortName)
        while pos is not None:
            assert shortName
            count += 1
            self._stripShort(pos, shortName)
            pos = findShort(self._args, shortName)

        _logger.debug(f"{_longName(longName)} given {count} time(s)")
        return count

    def isPresent(self, longName: str, shortName: Optional[str] = None) -> bool:
        """
        Tells if an option is present, without consuming it.

        Must be called before the option is pulled with `getParam`,
        `getParams` or `getFlag`.
        """
        return (
            findLong(self._args, longName) is not None
            or findShort(self._args, shortName) is not None
        )

    # --- Usage -------------------------------------------------------------- #

    def addUsageSeparator(self, title: str):
        """Starts a new group of options in the usage, titled `title`."""
        self._usage.addSeparator(title)

    def addUsageOutro(self, text: str):
        """Adds some text after the description of the options."""
        self._usage.addOutro(text)

    def usage(self) -> str:
        return self._usage.render()

    # --- Leftovers ---------------------------------------------------------- #

    def getRemaining(self) -> list[str]:
        return self._args[:]

    def getUnparsedOpts(self) -> list[str]:
        return [arg for arg in self._args if arg.startswith(const.SHORT_PREFIX)]

    def throwIfRemaining(self):
        if self._args:
            raise RemainingArgsError(self.getRemaining())

    def throwIfUnparsed(self):
        unparsed = self.getUnparsedOpts()
        if unparsed:
            raise UnparsedOptsError(unparsed)
