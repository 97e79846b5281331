import logging

from typing import Any, Callable, Optional

from . import const, utils

_logger = logging.getLogger(__name__)

# --- Scan ------------------------------------------------------------------- #


class Scan:
    """
    A simple scanner over a single command-line token.
    """

    _src: str
    _off: int
    _save: list[int]

    def __init__(self, src: str, off: int = 0):
        """
        Initializes a new `Scan` object.

        Args:
            src: The string to scan.
            off: The starting offset within the string.
        """
        self._src = src
        self._off = off
        self._save = []

    def curr(self) -> str:
        """
        Returns the current character being scanned.

        Returns:
            The current character, or '\0' if at the end of the string.
        """
        if self.eof():
            return "\0"
        return self._src[self._off]

    def next(self) -> str:
        """
        Advances the scanner to the next character.

        Returns:
            The new current character, or '\0' if at the end of the string.
        """
        if self.eof():
            return "\0"

        self._off += 1
        return self.curr()

    def eof(self) -> bool:
        """
        Checks if the scanner is at the end of the string.

        Returns:
            True if at the end of the string, False otherwise.
        """
        return self._off >= len(self._src)

    def consumed(self) -> int:
        """Returns the number of characters consumed so far."""
        return self._off

    def skipStr(self, s: str) -> bool:
        """
        Attempts to skip over the given string.

        Args:
            s: The string to skip.

        Returns:
            True if the string was skipped, False otherwise.
        """
        if self._src[self._off :].startswith(s):
            self._off += len(s)
            return True

        return False

    def skipAny(self, chars: str) -> str:
        """
        Skips over the longest run of characters taken from `chars`.

        Returns:
            The skipped characters.
        """
        res = ""
        while not self.eof() and self.curr() in chars:
            res += self.curr()
            self.next()
        return res

    def save(self) -> None:
        """Saves the current scanner position."""
        self._save.append(self._off)

    def restore(self) -> None:
        """Restores the scanner position to the last saved position."""
        self._off = self._save.pop()

    def commit(self) -> None:
        """Drops the last saved position, keeping the current one."""
        self._save.pop()

    def skipWhitespace(self) -> bool:
        """
        Skips over any whitespace characters.

        Returns:
            True if any whitespace was skipped, False otherwise.
        """
        result = False
        while not self.eof() and self.curr().isspace():
            self.next()
            result = True
        return result


# --- Scalars ---------------------------------------------------------------- #

DEC_DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"

TRUE_WORDS = ("true", "True", "y", "yes", "Y", "Yes")
FALSE_WORDS = ("false", "False", "n", "no", "N", "No")


def _scanSign(s: Scan) -> str:
    if s.curr() in "+-":
        sign = s.curr()
        s.next()
        return sign
    return ""


def _scanInt(s: Scan) -> Optional[int]:
    """Scans a decimal integer, leading whitespace is skipped."""
    s.skipWhitespace()
    sign = _scanSign(s)
    digits = s.skipAny(DEC_DIGITS)
    if not digits:
        return None
    return int(sign + digits)


def _scanHex(s: Scan) -> Optional[int]:
    """Scans a base-16 integer with an optional `0x` prefix."""
    s.skipWhitespace()
    sign = _scanSign(s)

    s.save()
    if s.skipStr("0x") or s.skipStr("0X"):
        digits = s.skipAny(HEX_DIGITS)
        if digits:
            s.commit()
            return int(sign + digits, 16)
    s.restore()

    digits = s.skipAny(HEX_DIGITS)
    if not digits:
        return None
    return int(sign + digits, 16)


def _scanFloat(s: Scan) -> Optional[float]:
    """Scans a decimal floating point number, with an optional exponent."""
    s.skipWhitespace()
    text = _scanSign(s)
    whole = s.skipAny(DEC_DIGITS)
    frac = ""
    if s.curr() == ".":
        s.next()
        frac = s.skipAny(DEC_DIGITS)
    if not whole and not frac:
        return None
    text += (whole or "0") + "." + (frac or "0")

    s.save()
    if s.curr() in "eE":
        s.next()
        expSign = _scanSign(s)
        exp = s.skipAny(DEC_DIGITS)
        if exp:
            s.commit()
            return float(f"{text}e{expSign}{exp}")
    s.restore()

    return float(text)


def _scanBool(s: Scan) -> Optional[bool]:
    s.skipWhitespace()
    s.save()
    word = s.skipAny("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
    if word in TRUE_WORDS:
        s.commit()
        return True
    if word in FALSE_WORDS:
        s.commit()
        return False
    s.restore()

    n = _scanInt(s)
    if n is None:
        return None
    return n != 0


SCANNERS: dict[type, Callable[[Scan], Any]] = {
    bool: _scanBool,
    int: _scanInt,
    float: _scanFloat,
}


def typeOf(value: Any) -> type:
    """
    Returns the value type used to parse tokens standing in for `value`.

    `None` is treated as a string parameter.
    """
    if value is None:
        return str
    # bool before int, bool is an int subclass
    for typ in (bool, str, int, float):
        if isinstance(value, typ):
            return typ
    raise TypeError(f"Unsupported parameter type '{type(value).__name__}'")


def parse(text: str, typ: type) -> Any:
    """
    Parses a whole token into a value of type `typ`.

    Strings are taken verbatim. Other types are scanned from the start of the
    token; when the scan stops before the end of the token, the token is read
    again as a base-16 integer, which is how `0xC` ends up as 12.

    Args:
        text: The token to parse.
        typ: One of `bool`, `int`, `float` or `str`.

    Returns:
        The parsed value.

    Raises:
        ValueError: The token is not a valid `typ`.
        TypeError: `typ` is not supported.
    """
    if typ is str:
        return text

    if typ not in SCANNERS:
        raise TypeError(f"Unsupported parameter type '{typ.__name__}'")

    s = Scan(text)
    value = SCANNERS[typ](s)
    if value is None:
        raise ValueError(f"'{text}' is not a valid {typ.__name__}")

    if s.eof():
        return value

    _logger.debug(
        f"'{text}' scanned as {typ.__name__} up to offset {s.consumed()}, retrying as hex"
    )
    s = Scan(text)
    n = _scanHex(s)
    if n is None or not s.eof():
        raise ValueError(f"'{text}' has trailing characters")

    return typ(n)


def elements(text: str, typ: type, sep: str = const.DEFAULT_SEPARATOR) -> list[Any]:
    """
    Parses every element of a delimited token.

    Consecutive separators count as one. Non-string elements may also be
    separated by whitespace.
    """
    parts = utils.split(text, sep)
    if typ is not str:
        parts = [word for part in parts for word in part.split()]
    return [parse(part, typ) for part in parts]


# --- Rendering -------------------------------------------------------------- #


def _renderBare(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render(value: Any) -> str:
    """Renders a default value for the usage, strings are quoted."""
    if value is None:
        return ""
    if isinstance(value, str):
        return f'"{value}"'
    return _renderBare(value)


def renderList(values: list[Any], sep: str = const.DEFAULT_JOINER) -> str:
    return sep.join(_renderBare(v) for v in values)
