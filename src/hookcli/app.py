"""Application: global options, command resolution and lifecycle dispatch.

Usage:
    from hookcli import App, Command

    app = App(name="demo", desc="demo application", version="1.0.0")
    app.add(Command("build", desc="build the project", func=build, aliases=["b"]))

    # run with sys.argv[1:]
    app.run()
    # custom args
    app.run(["build", "--target", "all"])

The run sequence: parse global options -> resolve the command name -> branch
to help, the fallback function or the named command -> execute with hooks ->
compute the exit code -> exit the process (``exit_on_end``) or return it.
"""

import logging
import os
import sys
from typing import List, Optional, Sequence, Tuple

from .command import Command
from .config import Config
from .exceptions import CommandNotFoundError, GlobalOptionsError, HookCLIError, StateError, UsageError
from .gflags import GlobalFlags, GlobalOptions
from .help import APP_HELP_TEMPLATE, HELP_COMMAND_USAGE, HelpReplacer
from .hooks import EventName, HookContext, HookFunc, Hooks
from .registry import HELP_COMMAND, CommandRegistry
from .resolver import CommandNameResolver, RunContext
from .types import AppFunc, HookData
from .types.enums import TRACE, ExitCode, HookEvent
from .utils.logging import configure_logging, operation_timer, set_verbose
from .utils.text import pad_right, render_text, upper_first

logger = logging.getLogger(__name__)


class App:
    """A command-line application.

    Attributes:
        name: application name
        desc: one line description, shown in help and version info
        version: version string
        bin_name: program name used in help output
        default_command: command to run when no command is given
        func: fallback ``func(app, args)`` run when no command is resolved
        exit_on_end: call ``sys.exit`` with the code at the end of ``run``
        logo: optional text printed with the version info
    """

    def __init__(self, name: str = "My CLI Application", desc: str = "This is my console application",
                 version: str = "1.0.0", bin_name: Optional[str] = None, default_command: str = "",
                 func: Optional[AppFunc] = None, exit_on_end: bool = True, logo: str = "",
                 config: Optional[Config] = None) -> None:
        self.name = name
        self.desc = desc
        self.version = version
        self.bin_name = bin_name or _default_bin_name(name)
        self.func = func
        self.exit_on_end = exit_on_end
        self.logo = logo
        self.config = config or Config.from_env()

        self.hooks = Hooks()
        self.registry = CommandRegistry()
        self.resolver = CommandNameResolver(self.registry, default_command)
        self.gflags = GlobalFlags(prog=self.bin_name)
        self.replacer = HelpReplacer()

        self.ctx: Optional[RunContext] = None
        self._initialized = False

    @property
    def default_command(self) -> str:
        return self.resolver.default_command

    @default_command.setter
    def default_command(self, name: str) -> None:
        self.resolver.default_command = name

    @property
    def command_name(self) -> str:
        """Canonical name of the command resolved by the current run."""
        return self.ctx.command_name if self.ctx else ""

    @property
    def global_options(self) -> GlobalOptions:
        return self.gflags.opts

    def initialize(self) -> None:
        """Prepare logging and help variables, fire ``app.init.after`` once."""
        if self._initialized:
            return

        configure_logging(self.config.log_level or self.config.verbose, self.config.log_format)
        self.replacer.add_replaces({
            "binName": self.bin_name,
            "workDir": os.getcwd(),
        })

        self._initialized = True
        self.fire(HookEvent.APP_INIT_AFTER)

    # ----- hooks -----

    def on(self, name: EventName, handler: HookFunc) -> None:
        """Register an application hook, replacing an existing one."""
        self.hooks.on(name, handler)

    def add_hook(self, name: EventName, handler: HookFunc) -> None:
        self.hooks.add_hook(name, handler)

    def fire(self, name: EventName, data: Optional[HookData] = None,
             cmd: Optional[Command] = None, err: Optional[BaseException] = None) -> bool:
        """Fire an application level event.

        Returns:
            True when the handler asks to stop
        """
        ctx = HookContext(name, cmd=cmd, data=data).with_app(self).with_err(err)
        return self.hooks.fire(name, ctx)

    # ----- commands -----

    def add(self, *cmds: Command) -> "App":
        """Register commands.

        Raises:
            ConfigurationError: On any invalid or conflicting command definition
        """
        for cmd in cmds:
            cmd.app = self
            self.registry.add(cmd)
            cmd.initialize()
        return self

    def add_alias(self, name: str, alias: str) -> None:
        self.registry.add_alias(name, alias)

    def add_aliases(self, name: str, *aliases: str) -> None:
        for alias in aliases:
            self.registry.add_alias(name, alias)

    def resolve_alias(self, token: str) -> str:
        return self.registry.resolve_alias(token)

    def is_command(self, name: str) -> bool:
        return self.registry.is_command(name)

    def command(self, name: str) -> Optional[Command]:
        return self.registry.get(name)

    def command_names(self) -> List[str]:
        return self.registry.names()

    def find_similar_cmd(self, input_name: str) -> List[str]:
        return self.resolver.find_similar(input_name)

    # ----- running -----

    def run(self, args: Optional[Sequence[str]] = None) -> int:
        """Run the application.

        Args:
            args: argument vector without the program name, defaults to
                ``sys.argv[1:]``

        Returns:
            The exit code, when ``exit_on_end`` is off
        """
        self.initialize()

        # exclude first arg, it's the program file
        if args is None:
            args = sys.argv[1:]

        self.ctx = RunContext(argv=list(args), args=list(args))
        logger.debug(f"will begin run cli application. args: {self.ctx.argv}")

        code = self._parse_global_opts()
        if code != ExitCode.GOON:
            return self._exit_on_end(code)

        logger.log(TRACE, f"begin run console application, PID: {os.getpid()}")

        code, name = self._prepare_run()
        if code != ExitCode.GOON:
            return self._exit_on_end(code)

        # the stop signal of this event is not checked
        self.fire(HookEvent.APP_PREPARED_AFTER, {"name": name, "args": self.ctx.args})

        code = self._do_run_cmd(name, self.ctx.args)
        logger.debug(f"command '{name}' run complete, exit with code: {int(code)}")
        return self._exit_on_end(code)

    def _parse_global_opts(self) -> ExitCode:
        logger.debug("will begin parse global options")

        try:
            self.ctx.args = self.gflags.parse(self.ctx.args)
        except GlobalOptionsError as e:
            self._print_error(e)
            print(f"Use {self.bin_name} --help to see available options", file=sys.stderr)
            return ExitCode.ERR

        opts = self.gflags.opts
        if opts.verbose is not None:
            set_verbose(opts.verbose)
        self.fire(HookEvent.GLOBAL_OPTS_PARSED, {"args": self.ctx.args, "options": opts})

        if opts.show_help:
            self.show_application_help()
            return ExitCode.OK

        if opts.show_version:
            self.show_version_info()
            return ExitCode.OK

        logger.debug(f"global options parsed, verbose level is {opts.verbose}")
        return ExitCode.GOON

    def _prepare_run(self) -> Tuple[ExitCode, str]:
        ctx = self.ctx

        # like 'help' or 'help COMMAND'
        if ctx.args and ctx.args[0] == HELP_COMMAND:
            names = ctx.args[1:]
            if not names:
                self.show_application_help()
                return ExitCode.OK, ""
            return self.show_command_help(names), ""

        name = self.resolver.find_command_name(ctx)

        # not input and not set default command
        if not name:
            if self.func is not None:
                return self._do_run_func(ctx.args), ""

            self.show_application_help()
            return ExitCode.OK, ""

        if not self.registry.is_command(name):
            logger.debug(f"input the command is not registered: {name}")
            return self.show_command_tips(name), ""

        ctx.command_name = name
        return ExitCode.GOON, name

    def _do_run_cmd(self, name: str, args: List[str]) -> ExitCode:
        cmd = self.registry.get(name)
        if self.fire(HookEvent.APP_RUN_BEFORE, {"args": args}, cmd=cmd.copy()):
            logger.debug(f"command '{name}' stopped by event {HookEvent.APP_RUN_BEFORE}")
            return ExitCode.OK

        logger.debug(f"will run command '{name}' with args: {args}")
        try:
            with operation_timer(f"command '{name}'", debug=self.config.debug,
                                 threshold_ms=self.config.performance_threshold_ms):
                cmd.inner_dispatch(args)
        except Exception as e:
            logger.debug(f"command '{name}' failed", exc_info=True)
            if not self.fire(HookEvent.APP_RUN_ERROR, {"args": args}, cmd=cmd, err=e):
                self._print_error(e)
            return ExitCode.ERR

        self.fire(HookEvent.APP_RUN_AFTER, {"args": args}, cmd=cmd)
        return ExitCode.OK

    def _do_run_func(self, args: List[str]) -> ExitCode:
        logger.debug(f"no command resolved, run the application func with args: {args}")
        try:
            self.func(self, args)
        except Exception as e:
            logger.debug("application func failed", exc_info=True)
            if not self.fire(HookEvent.APP_RUN_ERROR, {"args": args}, err=e):
                self._print_error(e)
            return ExitCode.ERR

        self.fire(HookEvent.APP_RUN_AFTER, {"args": args})
        return ExitCode.OK

    def _exit_on_end(self, code: ExitCode) -> int:
        if code == ExitCode.GOON:
            raise StateError("the internal continue signal reached the exit hand-off",
                             expected_state="exit code", actual_state="GOON")

        logger.debug(f"application exit with code: {int(code)}")
        if self.exit_on_end:
            self.exit(code)
        return int(code)

    def exit(self, code: int = ExitCode.OK) -> None:
        """Exit the process with the code."""
        sys.exit(int(code))

    def exec(self, name: str, args: Optional[Sequence[str]] = None) -> None:
        """Run another command from inside a command.

        The name is looked up directly, without alias resolution. Only the
        command-level ``cmd.exec.*`` events fire, and errors are raised to the
        caller instead of becoming an exit code.

        Raises:
            CommandNotFoundError: If the name is not a registered command
        """
        cmd = self.registry.get(name)
        if cmd is None:
            raise CommandNotFoundError(name, message=f"exec unknown command name '{name}'")

        cmd.inner_execute(list(args or []))

    # ----- help output -----

    def replace_vars(self, text: str, cmd: Optional[Command] = None) -> str:
        """Replace the ``{$name}`` help variables in text."""
        if cmd is None:
            return self.replacer.replace_pairs(text)

        replacer = HelpReplacer(self.replacer.replaces())
        replacer.add_replaces({
            "cmd": cmd.path,
            "fullCmd": f"{self.bin_name} {cmd.path}",
        })
        return replacer.replace_pairs(text)

    def show_application_help(self) -> None:
        """Display the application help and list all commands."""
        logger.debug("render application commands list")

        width = self.registry.name_max_width
        parts = []
        for module, cmds in self.registry.module_commands().items():
            if module:
                parts.append(f"\n {module}")
            for cmd in cmds:
                line = f"\n  {pad_right(cmd.name, width)} {upper_first(cmd.desc)}"
                if cmd.aliases:
                    line += f" (alias: {','.join(cmd.aliases)})"
                parts.append(line)

        text = render_text(APP_HELP_TEMPLATE, {
            "desc": upper_first(self.desc),
            "version": self.version,
            "global_options": self.gflags.help_text(),
            "commands": "".join(parts),
            "help_name": pad_right(HELP_COMMAND, width),
        })
        print(self.replace_vars(text), end="")

    def show_version_info(self) -> None:
        logger.debug("print application version info")

        print(f"{upper_first(self.desc)}\n\nVersion: {self.version}")
        if self.logo:
            print(self.logo)

    def show_command_help(self, names: List[str]) -> ExitCode:
        """Display help for one command, like ``help COMMAND``."""
        if len(names) != 1:
            self._print_error(UsageError("Too many arguments given.", usage=f"{self.bin_name} help {{COMMAND}}"))
            return ExitCode.ERR

        name = self.registry.resolve_alias(names[0])
        if name in (HELP_COMMAND, "-h", "--help"):
            print(self.replace_vars(HELP_COMMAND_USAGE), end="")
            return ExitCode.OK

        cmd = self.registry.get(name)
        if cmd is None:
            self._print_error(CommandNotFoundError(
                name, message=f"Unknown command name '{name}'. Run '{self.bin_name} -h' see all commands",
            ))
            return ExitCode.ERR

        cmd.show_help()
        return ExitCode.OK

    def show_command_tips(self, name: str) -> ExitCode:
        """Report an unknown command with similar names.

        The not-found hooks see the name, the suggestions and the error; a
        handler returning True replaces the default output.
        """
        logger.debug("show similar command tips")

        similar = self.find_similar_cmd(name)
        err = CommandNotFoundError(name, similar=similar, message=f'unknown input command "{name}"')
        data = {"name": name, "similar": similar}
        for event in (HookEvent.APP_CMD_NOT_FOUND, HookEvent.CMD_NOT_FOUND):
            if self.fire(event, data, err=err):
                return ExitCode.ERR

        print(f"ERROR: {err.message}", file=sys.stderr)
        if similar:
            print(f"\nMaybe you mean:\n  {', '.join(similar)}", file=sys.stderr)
        print(f"\nUse {self.bin_name} --help to see available commands", file=sys.stderr)
        return ExitCode.ERR

    def _print_error(self, err: BaseException) -> None:
        if isinstance(err, HookCLIError):
            print(f"ERROR: {err.get_user_message()}", file=sys.stderr)
        else:
            print(f"ERROR: {err}", file=sys.stderr)


def _default_bin_name(name: str) -> str:
    if sys.argv and sys.argv[0]:
        return os.path.basename(sys.argv[0])
    return name
