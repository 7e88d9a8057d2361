"""Option parsing for the application and its commands.

Options are declared and parsed with argparse. ``FlagParser`` turns argparse
usage failures into ``FlagParseError`` so the dispatch engine decides the exit
code instead of argparse calling ``sys.exit``.

Global options are parsed from the front of the argument vector only: the
first positional token (the command name) and everything after it is left for
the command.
"""

import argparse
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .exceptions import FlagParseError, GlobalOptionsError
from .types.enums import VerbLevel
from .utils.text import pad_right

logger = logging.getLogger(__name__)


class FlagParser(argparse.ArgumentParser):
    """ArgumentParser that raises on errors instead of exiting the process."""

    error_class = FlagParseError

    def error(self, message: str):
        raise self.error_class(message, prog=self.prog)

    def exit(self, status: int = 0, message: Optional[str] = None):
        raise self.error_class(message.strip() if message else f"exit with status {status}", prog=self.prog)

    def options_help(self) -> str:
        """Render the option list without the usage line."""
        usage = self.usage
        self.usage = argparse.SUPPRESS
        try:
            return self.format_help().strip("\n")
        finally:
            self.usage = usage


class GlobalFlagParser(FlagParser):
    error_class = GlobalOptionsError


def _verbose_type(value: str) -> VerbLevel:
    try:
        return VerbLevel.from_value(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


# (flags, argparse keyword arguments) for every global option
GLOBAL_OPTIONS: List[Tuple[Tuple[str, ...], Dict[str, Any]]] = [
    (("--verbose",), {
        "type": _verbose_type,
        "default": None,
        "metavar": "LEVEL",
        "help": "Set error reporting level(quiet 0 - 5 crazy)",
    }),
    (("--no-color",), {
        "action": "store_true",
        "help": "Disable color when outputting message",
    }),
    (("--no-interactive",), {
        "action": "store_true",
        "help": "Disable interactive confirmation operations",
    }),
    (("--no-progress",), {
        "action": "store_true",
        "help": "Disable display progress message",
    }),
    (("-h", "--help"), {
        "action": "store_true",
        "dest": "show_help",
        "help": "Display the help information",
    }),
    (("-V", "--version"), {
        "action": "store_true",
        "dest": "show_version",
        "help": "Display app version information",
    }),
]


@dataclass
class GlobalOptions:
    """Values of the application-level options."""
    verbose: Optional[VerbLevel] = None
    no_color: bool = False
    no_interactive: bool = False
    no_progress: bool = False
    show_help: bool = False
    show_version: bool = False


class GlobalFlags:
    """Global option set of an application."""

    REST_DEST = "_rest"

    def __init__(self, prog: str = "app") -> None:
        self.parser = GlobalFlagParser(prog=prog, add_help=False, allow_abbrev=False)
        for flags, kwargs in GLOBAL_OPTIONS:
            self.parser.add_argument(*flags, **kwargs)
        self.parser.add_argument(self.REST_DEST, nargs=argparse.REMAINDER)

        self.opts = GlobalOptions()
        self.args: List[str] = []

    def parse(self, args: Sequence[str]) -> List[str]:
        """Parse global options from the front of ``args``.

        Returns:
            The remaining arguments, starting at the command name

        Raises:
            GlobalOptionsError: On unknown options or bad option values
        """
        ns = self.parser.parse_args(list(args))
        rest = getattr(ns, self.REST_DEST) or []
        # a leading "--" only separates the global options
        if rest and rest[0] == "--":
            rest = rest[1:]

        self.opts = GlobalOptions(
            verbose=ns.verbose,
            no_color=ns.no_color,
            no_interactive=ns.no_interactive,
            no_progress=ns.no_progress,
            show_help=ns.show_help,
            show_version=ns.show_version,
        )
        self.args = list(rest)
        logger.debug(f"global options parsed: {self.opts}, remaining args: {self.args}")
        return self.args

    def help_text(self) -> str:
        """Render the global option list, one aligned line per option."""
        rows = []
        for flags, kwargs in GLOBAL_OPTIONS:
            names = ", ".join(flags)
            if kwargs.get("metavar"):
                names += f" {kwargs['metavar']}"
            rows.append((names, kwargs.get("help", "")))

        width = max(len(names) for names, _ in rows)
        return "\n".join(f"  {pad_right(names, width)}  {desc}" for names, desc in rows)
