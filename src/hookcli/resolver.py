"""Command name resolution and "did you mean" suggestions."""

import logging
from dataclasses import dataclass, field
from typing import List

from .registry import HELP_COMMAND, CommandRegistry
from .utils.names import is_good_cmd_id
from .utils.text import MAX_SIMILAR, similar_names

logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """Per-invocation state, created at the start of a run.

    Attributes:
        argv: the full original argument vector
        args: remaining arguments, consumed as global options and the command
            token are stripped off
        input_name: the command token actually typed, empty when nothing
            registered was typed
        command_name: the resolved canonical name
    """
    argv: List[str]
    args: List[str] = field(default_factory=list)
    input_name: str = ""
    command_name: str = ""


class CommandNameResolver:
    """Turns the post-global-options arguments into a canonical command name."""

    def __init__(self, registry: CommandRegistry, default_command: str = "") -> None:
        self.registry = registry
        self.default_command = default_command

    def find_command_name(self, ctx: RunContext) -> str:
        """Resolve the command name from ``ctx.args``.

        - no arguments: the default command when it is registered, else ""
        - malformed first token: ""
        - alias or name of a registered command: the canonical name; the typed
          token is kept in ``ctx.input_name`` and stripped from ``ctx.args``
        - anything else: the alias-resolved token, ``ctx.input_name`` unset
        """
        args = ctx.args

        # not input command, will try the default command
        if not args:
            name = self.default_command
            if not name:
                return ""

            if not self.registry.is_command(name):
                logger.error(f"the default command '{name}' is invalid")
                return ""
            return name

        name = args[0]
        if not is_good_cmd_id(name):
            return ""

        real_name = self.registry.resolve_alias(name)
        if self.registry.is_command(real_name):
            ctx.args = args[1:]
            ctx.input_name = name
            logger.debug(f"input command: '{name}', real command: '{real_name}'")

        return real_name

    def find_similar(self, input_name: str) -> List[str]:
        """Find up to five names or aliases related to ``input_name``.

        A candidate qualifies when the longer of the two strings contains the
        shorter one. Canonical names (plus ``help``) are scanned before
        aliases, both in registration order; no ranking is applied.
        """
        candidates = self.registry.names() + [HELP_COMMAND] + list(self.registry.aliases)
        return similar_names(input_name, candidates, MAX_SIMILAR)
