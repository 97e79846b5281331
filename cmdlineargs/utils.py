
def split(s: str, sep: str) -> list[str]:
    """Splits `s` on `sep`, a run of separators counts as a single one."""
    return [part for part in s.split(sep) if part]


def splitLines(s: str, delim: str) -> list[str]:
    """
    Splits `s` the way a line reader would: empty fields in the middle are
    kept, a trailing empty field is not, and an empty string yields nothing.
    """
    parts = s.split(delim)
    if parts[-1] == "":
        parts.pop()
    return parts
