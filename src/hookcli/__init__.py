"""hookcli - command-line application framework with lifecycle hooks.

This module provides an application object that resolves which registered
command should run from the raw process arguments, dispatches it through a
fixed lifecycle, and lets observers intercept every stage through named hooks.

Basic Usage:
    from hookcli import App, Command, HookEvent

    def build(cmd, args):
        print(f"build with {args}")

    app = App(name="demo", desc="demo application", version="1.0.0")
    app.add(Command("build", desc="build the project", func=build, aliases=["b"]))

    app.on(HookEvent.APP_RUN_ERROR, lambda ctx: print(f"failed: {ctx.err}"))
    app.run()

Resolution:
    - exact command name or alias
    - the default command when no argument is given
    - "help" and "help COMMAND" are reserved
    - unknown names are reported with similar names ("did you mean")

Exit codes:
    - 0 success
    - 2 generic failure
"""

from .aliases import Aliases
from .app import App
from .command import Command
from .config import Config
from .exceptions import (
    AliasConflictError,
    CommandNotFoundError,
    ConfigurationError,
    DuplicateCommandError,
    FlagParseError,
    GlobalOptionsError,
    HookCLIError,
    InvalidHookHandlerError,
    InvalidNameError,
    StateError,
    UsageError,
)
from .gflags import FlagParser, GlobalOptions
from .help import HelpReplacer
from .hooks import BackgroundContext, HookContext, Hooks
from .registry import HELP_COMMAND, CommandRegistry
from .resolver import CommandNameResolver, RunContext
from .types.enums import ExitCode, HookEvent, VerbLevel

__version__ = "1.0.0"

# result codes
OK = ExitCode.OK
ERR = ExitCode.ERR
GOON = ExitCode.GOON

__all__ = [
    # Application
    "App",
    "Command",
    "Config",
    "CommandRegistry",
    "CommandNameResolver",
    "RunContext",
    "Aliases",
    "HELP_COMMAND",
    # Hooks
    "Hooks",
    "HookContext",
    "BackgroundContext",
    "HookEvent",
    # Options and help
    "FlagParser",
    "GlobalOptions",
    "HelpReplacer",
    # Codes
    "ExitCode",
    "VerbLevel",
    "OK",
    "ERR",
    "GOON",
    # Exceptions
    "HookCLIError",
    "ConfigurationError",
    "InvalidNameError",
    "DuplicateCommandError",
    "AliasConflictError",
    "InvalidHookHandlerError",
    "CommandNotFoundError",
    "UsageError",
    "FlagParseError",
    "GlobalOptionsError",
    "StateError",
]
