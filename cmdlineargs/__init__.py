import sys
import logging

from typing import Optional

from . import cli, const, vt100
from .cli import (
    CmdLineArgs,
    CmdLineError,
    MissingValueError,
    InvalidValueError,
    ArityMismatchError,
    RemainingArgsError,
    UnparsedOptsError,
)

_logger = logging.getLogger(__name__)

__all__ = [
    "CmdLineArgs",
    "CmdLineError",
    "MissingValueError",
    "InvalidValueError",
    "ArityMismatchError",
    "RemainingArgsError",
    "UnparsedOptsError",
    "main",
]


class logger:
    @staticmethod
    def setup(verbose: int):
        if not verbose:
            return

        logging.basicConfig(
            level=logging.DEBUG,
            format=f"{vt100.CYAN}%(asctime)s{vt100.RESET} {vt100.YELLOW}%(levelname)s{vt100.RESET} %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def main(argv: Optional[list[str]] = None) -> int:
    argv = sys.argv if argv is None else argv
    args = cli.CmdLineArgs(
        argv, f"{const.ARGV0} v{const.VERSION_STR} - {const.DESCRIPTION}"
    )

    try:
        verbose = args.getFlag("verbose", None, "Log what happens while parsing")
        logger.setup(verbose)

        help = args.getFlag("help", "h", "Show this usage")
        name = args.getParam("name", None, "stone", "The name of something")
        number = args.getParam("number", "n", 5, "Number of whatever")

        args.addUsageSeparator("  == Advanced options:")
        ratio = args.getParam("ratio", None, 0.2, "The ratio")
        numbers = args.getParams(
            "values",
            None,
            [1, 2],
            True,
            "A comma separated list of values\nor a single value for both",
        )
        args.addUsageOutro("Anything not starting with '-' is listed as remaining.\n")

        remaining = args.getRemaining()
        args.throwIfUnparsed()

    except cli.CmdLineError as e:
        _logger.debug("Parsing failed", exc_info=True)
        print(args.usage(), end="", file=sys.stderr)
        print(str(e), file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print()
        return 1

    if len(argv) <= 1 or help:
        print(args.usage())

    vt100.title("Parsed")
    print(vt100.indent(f"name={name}"))
    print(vt100.indent(f"number={number}"))
    print(vt100.indent(f"ratio={ratio}"))
    print(vt100.indent(f"numbers={','.join(str(n) for n in numbers)}"))

    if remaining:
        print(vt100.indent(f"remaining: {' '.join(remaining)}"))
    else:
        print(vt100.indent("no arg remaining"))

    return 0
