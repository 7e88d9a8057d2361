"""Command handle: metadata, options, sub-commands and the execution lifecycle.

A command body is a callable ``func(cmd, args)``. It reports failure by
raising; the exception travels through the ``cmd.exec.error`` and
``cmd.run.error`` events before the application converts it to an exit code.

Usage:
    def build(cmd, args):
        print(f"building {cmd.opts.target} with {args}")

    def configure(cmd):
        cmd.flags.add_argument("--target", default="all")

    cmd = Command("build", desc="build the project", func=build,
                  aliases=["b"], config=configure)
"""

import argparse
import logging
from typing import Any, Callable, Dict, List, Optional

from .aliases import Aliases
from .exceptions import (
    AliasConflictError,
    CommandNotFoundError,
    ConfigurationError,
    DuplicateCommandError,
    InvalidNameError,
)
from .gflags import FlagParser
from .help import CMD_HELP_TEMPLATE
from .hooks import HookContext, HookFunc, Hooks, EventName
from .types import CommandFunc, HookData
from .types.enums import HookEvent
from .utils.names import GOOD_CMD_ID_PATTERN, GOOD_CMD_NAME_PATTERN, is_good_cmd_id, is_good_cmd_name, split_cmd_id
from .utils.text import MAX_SIMILAR, pad_right, render_text, similar_names, upper_first

logger = logging.getLogger(__name__)

HELP_DEST = "_show_help"


class Command:
    """A registered command.

    Attributes:
        name: canonical name, may be namespaced like ``group:action``
        desc: one line description shown in command lists
        func: command body ``func(cmd, args)``
        aliases: alternate names resolving to this command
        module: group label used only for help listing
        config: ``config(cmd)`` called once to declare options on ``cmd.flags``
        examples: example lines shown in the command help
        help: free text appended to the command help
        hidden: do not list the command in the application help
        opts: parsed option values of the last execution
        args: remaining arguments of the last execution
    """

    def __init__(self, name: str, desc: str = "", func: Optional[CommandFunc] = None,
                 aliases: Optional[List[str]] = None, module: str = "",
                 config: Optional[Callable[["Command"], Any]] = None,
                 examples: str = "", help: str = "", hidden: bool = False) -> None:
        self.name = name
        self.desc = desc
        self.func = func
        self.aliases: List[str] = list(aliases or [])
        self.module = module
        self.config = config
        self.examples = examples
        self.help = help
        self.hidden = hidden

        self.hooks = Hooks()
        self.parent: Optional["Command"] = None
        self.subs: Dict[str, "Command"] = {}
        self.sub_aliases = Aliases()

        self.flags: Optional[FlagParser] = None
        self.opts = argparse.Namespace()
        self.args: List[str] = []

        self._app: Any = None
        self._initialized = False

        if not self.module and ":" in name:
            self.module = split_cmd_id(name)[0]

    def __repr__(self) -> str:
        return f"Command(name={self.name!r}, aliases={self.aliases!r})"

    @property
    def app(self) -> Any:
        if self._app is not None:
            return self._app
        if self.parent is not None:
            return self.parent.app
        return None

    @app.setter
    def app(self, app: Any) -> None:
        self._app = app

    @property
    def path(self) -> str:
        """Full command path, like ``parent child``."""
        if self.parent is not None:
            return f"{self.parent.path} {self.name}"
        return self.name

    def on(self, name: EventName, handler: HookFunc) -> None:
        """Register a hook that only sees events of this command."""
        self.hooks.on(name, handler)

    def validate(self) -> None:
        """Check the command definition.

        Raises:
            InvalidNameError: If the name or an alias is malformed
            ConfigurationError: If the command has neither a body nor sub-commands
        """
        if self.parent is None:
            if not is_good_cmd_id(self.name):
                raise InvalidNameError(self.name, kind="command", pattern=GOOD_CMD_ID_PATTERN)
        elif not is_good_cmd_name(self.name):
            raise InvalidNameError(self.name, kind="sub-command", pattern=GOOD_CMD_NAME_PATTERN)

        if self.func is None and not self.subs:
            raise ConfigurationError(f"the command '{self.path}' must have a func or sub-commands")

    def initialize(self) -> None:
        """Build the option parser and fire ``cmd.init.after`` once.

        Sub-commands added before are initialized right after the command.
        """
        if self._initialized:
            return

        prog = self.path
        app = self.app
        if app is not None and getattr(app, "bin_name", ""):
            prog = f"{app.bin_name} {prog}"

        self.flags = FlagParser(prog=prog, add_help=False, allow_abbrev=False)
        self.flags.add_argument("-h", "--help", action="store_true", dest=HELP_DEST,
                                help="Display the help information")
        if self.config is not None:
            self.config(self)

        self._initialized = True
        self.fire(HookEvent.CMD_INIT_AFTER)

        for sub in self.subs.values():
            sub.initialize()

    def add(self, *subs: "Command") -> "Command":
        """Add sub-commands.

        Raises:
            DuplicateCommandError: If a sub-command name is already used
            AliasConflictError: If a sub-command alias collides with a name
        """
        for sub in subs:
            if sub.name in self.subs or self.sub_aliases.has_alias(sub.name):
                raise DuplicateCommandError(f"{self.path} {sub.name}")

            sub.parent = self
            sub.validate()
            for alias in sub.aliases:
                if alias in self.subs or alias == sub.name:
                    raise AliasConflictError(
                        f"the alias '{alias}' collides with a sub-command name of '{self.path}'",
                        alias=alias, target=sub.name,
                    )
                self.sub_aliases.add_alias(sub.name, alias)

            self.subs[sub.name] = sub
            if self._initialized:
                sub.initialize()
        return self

    def sub(self, name: str) -> Optional["Command"]:
        return self.subs.get(self.sub_aliases.resolve_alias(name))

    def copy(self) -> "Command":
        """Snapshot of the descriptive metadata, without the body or options."""
        cp = Command(self.name, desc=self.desc, aliases=list(self.aliases), module=self.module,
                     examples=self.examples, help=self.help, hidden=self.hidden)
        cp.parent = self.parent
        cp.app = self._app
        return cp

    def fire(self, name: EventName, data: Optional[HookData] = None,
             err: Optional[BaseException] = None) -> bool:
        """Fire an event on this command, then its parents, then the app.

        Returns:
            True when a handler asks to stop
        """
        ctx = HookContext(name, cmd=self, data=data).with_err(err)
        logger.debug(f"command '{self.path}' fire event: {ctx.name}")

        node: Optional[Command] = self
        while node is not None:
            if node.hooks.fire(name, ctx):
                return True
            node = node.parent

        app = self.app
        if app is not None:
            return app.hooks.fire(name, ctx)
        return False

    def inner_dispatch(self, args: List[str]) -> None:
        """Run the command from the top-level dispatch path.

        Fires ``cmd.run.before``, routes to a sub-command when one matches,
        executes, then fires ``cmd.run.after`` or ``cmd.run.error``.
        """
        if self.fire(HookEvent.CMD_RUN_BEFORE, {"args": args}):
            logger.debug(f"command '{self.path}' stopped by event {HookEvent.CMD_RUN_BEFORE}")
            return

        try:
            self._dispatch(args)
        except Exception as e:
            self.fire(HookEvent.CMD_RUN_ERROR, {"args": args}, err=e)
            raise

        self.fire(HookEvent.CMD_RUN_AFTER, {"args": args})

    def _dispatch(self, args: List[str]) -> None:
        if self.subs and args and not args[0].startswith("-"):
            sub = self.sub(args[0])
            if sub is not None:
                logger.debug(f"dispatch to sub-command '{sub.path}'")
                sub.inner_dispatch(args[1:])
                return

            if self.func is None:
                self._sub_not_found(args[0])
                return

        if self.func is None:
            self.show_help()
            return

        self.inner_execute(args)

    def _sub_not_found(self, name: str) -> None:
        if self.fire(HookEvent.CMD_SUB_NOT_FOUND, {"name": name}):
            logger.debug(f"sub-command '{name}' not found, handled by event")
            return

        raise CommandNotFoundError(
            name, similar=self._similar_subs(name),
            message=f"unknown sub-command '{name}' of '{self.path}'",
        )

    def _similar_subs(self, name: str) -> List[str]:
        return similar_names(name, list(self.subs) + list(self.sub_aliases), MAX_SIMILAR)

    def parse_options(self, args: List[str]) -> List[str]:
        """Parse the command options, returning the remaining arguments.

        Raises:
            FlagParseError: On bad option values or missing required options
        """
        self.initialize()
        self.opts, rest = self.flags.parse_known_args(args)
        return rest

    def inner_execute(self, args: List[str]) -> None:
        """Parse options and run the body, firing the ``cmd.exec.*`` events.

        This is the command-level part of the lifecycle, shared by the top-level
        dispatch path and by ``App.exec``. A command without a body, like a
        group of sub-commands, shows its help instead.
        """
        args = self.parse_options(args)
        if self.func is None or getattr(self.opts, HELP_DEST, False):
            self.show_help()
            return

        self.fire(HookEvent.CMD_OPTS_PARSED, {"args": args})

        if self.fire(HookEvent.CMD_EXEC_BEFORE, {"args": args}):
            logger.debug(f"command '{self.path}' stopped by event {HookEvent.CMD_EXEC_BEFORE}")
            return

        self.args = args
        logger.debug(f"execute command '{self.path}' with args: {args}")
        try:
            self.func(self, args)
        except Exception as e:
            self.fire(HookEvent.CMD_EXEC_ERROR, {"args": args}, err=e)
            raise

        self.fire(HookEvent.CMD_EXEC_AFTER, {"args": args})

    def help_text(self) -> str:
        """Render the command help, help variables not yet replaced."""
        self.initialize()

        aliases = ""
        if self.aliases:
            aliases = f"Aliases: {', '.join(self.aliases)}\n"

        subcommands = ""
        if self.subs:
            width = max(len(name) for name in self.subs)
            lines = [
                f"  {pad_right(sub.name, width)}  {upper_first(sub.desc)}"
                for sub in self.subs.values() if not sub.hidden
            ]
            subcommands = "\nSubcommands:\n" + "\n".join(lines) + "\n"

        options = "\n" + self.flags.options_help() + "\n"

        examples = ""
        if self.examples:
            examples = "\nExamples:\n" + self.examples.strip("\n") + "\n"

        help_text = ""
        if self.help:
            help_text = "\n" + self.help.strip("\n") + "\n"

        return render_text(CMD_HELP_TEMPLATE, {
            "desc": upper_first(self.desc) or "No description",
            "aliases": aliases,
            "subcommands": subcommands,
            "options": options,
            "examples": examples,
            "help": help_text,
        })

    def show_help(self) -> None:
        """Print the command help through the application help replacer."""
        text = self.help_text()
        app = self.app
        if app is not None:
            text = app.replace_vars(text, cmd=self)
        print(text)
