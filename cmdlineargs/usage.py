import dataclasses as dt

from typing import Optional

from . import const, vt100


@dt.dataclass
class Entry:
    """
    One line of the usage.

    Attributes:
        label: The rendered option, e.g. "    --nb (-n) (default: 0)".
        description: The description, may span several lines.
        separator: True if this entry is a section title rather than an option.
    """

    label: str
    description: str
    separator: bool = False


def label(longName: str, shortName: Optional[str], default: str = "") -> str:
    res = " " * const.USAGE_INDENT + const.LONG_PREFIX + longName
    if shortName and shortName != const.NO_SHORT_NAME:
        res += f" ({const.SHORT_PREFIX}{shortName})"
    if default:
        res += f" (default: {default})"
    return res


@dt.dataclass
class Usage:
    """
    Records every declared option, in declaration order, and renders them.
    """

    intro: str = ""
    outro: str = ""
    entries: list[Entry] = dt.field(default_factory=list)

    def add(
        self,
        longName: str,
        shortName: Optional[str],
        default: str,
        description: str,
    ):
        self.entries.append(Entry(label(longName, shortName, default), description))

    def addSeparator(self, title: str):
        self.entries.append(Entry("", title, True))

    def addOutro(self, text: str):
        self.outro += text

    def width(self) -> int:
        """Returns the column at which descriptions start."""
        labels = [len(e.label) for e in self.entries if not e.separator]
        return max(labels, default=0) + const.USAGE_MARGIN

    def render(self) -> str:
        width = self.width()
        res = self.intro + "\n"
        for entry in self.entries:
            if entry.separator:
                res += entry.description + "\n"
                continue
            res += entry.label.ljust(width)
            res += vt100.indent(entry.description, width, first=False) + "\n"
        res += self.outro
        return res
