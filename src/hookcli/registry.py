"""Command registration table owned by one application instance."""

import logging
from typing import Dict, Iterable, List, Optional

from .aliases import Aliases
from .command import Command
from .exceptions import AliasConflictError, ConfigurationError, DuplicateCommandError, InvalidNameError
from .utils.names import GOOD_CMD_NAME_PATTERN, is_good_cmd_name

logger = logging.getLogger(__name__)

# reserved first-token keyword, intercepted before name resolution
HELP_COMMAND = "help"


class CommandRegistry:
    """Canonical name -> command table plus the alias table.

    Populated during application setup and read-only while dispatching.
    Registration problems are programming mistakes of the application author
    and raise immediately.
    """

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self.aliases = Aliases()
        self.name_max_width = len(HELP_COMMAND)

    def add(self, cmd: Command) -> Command:
        """Register a top-level command and its aliases.

        Raises:
            InvalidNameError: If the name or an alias is malformed
            ConfigurationError: If the name is the reserved help keyword
            DuplicateCommandError: If the name is already registered
            AliasConflictError: If the name or an alias collides with another entry
        """
        cmd.validate()
        name = cmd.name

        if name == HELP_COMMAND:
            raise ConfigurationError(f"the command name '{name}' is reserved", error_code="USER_RESERVED_NAME")
        if name in self._commands:
            raise DuplicateCommandError(name)
        if self.aliases.has_alias(name):
            raise AliasConflictError(
                f"the command name '{name}' is already used as an alias of '{self.aliases.resolve_alias(name)}'",
                alias=name, target=name,
            )

        # check every alias before touching the tables
        seen = set()
        for alias in cmd.aliases:
            if alias == name or alias in seen:
                raise AliasConflictError(f"the alias '{alias}' is repeated for command '{name}'",
                                         alias=alias, target=name)
            seen.add(alias)
            self._check_alias(name, alias, allow_pending=True)

        self._commands[name] = cmd
        for alias in cmd.aliases:
            self.aliases.add_alias(name, alias)

        self.name_max_width = max(self.name_max_width, len(name))
        logger.debug(f"register command '{name}' (aliases: {cmd.aliases})")
        return cmd

    def add_alias(self, name: str, alias: str) -> None:
        """Add an alias for an already registered command."""
        self._check_alias(name, alias)
        self.aliases.add_alias(name, alias)

        cmd = self._commands[name]
        if alias not in cmd.aliases:
            cmd.aliases.append(alias)

    def _check_alias(self, name: str, alias: str, allow_pending: bool = False) -> None:
        if not is_good_cmd_name(alias):
            raise InvalidNameError(alias, kind="alias", pattern=GOOD_CMD_NAME_PATTERN)
        if not allow_pending and name not in self._commands:
            raise AliasConflictError(f"the alias '{alias}' targets unknown command '{name}'",
                                     alias=alias, target=name)
        if alias == HELP_COMMAND or alias in self._commands:
            raise AliasConflictError(f"the alias '{alias}' collides with a command name",
                                     alias=alias, target=name)

        current = self.aliases.resolve_alias(alias)
        if self.aliases.has_alias(alias) and current != name:
            raise AliasConflictError(f"the alias '{alias}' is already used by command '{current}'",
                                     alias=alias, target=name)

    def resolve_alias(self, token: str) -> str:
        return self.aliases.resolve_alias(token)

    def is_command(self, name: str) -> bool:
        return name in self._commands

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def names(self) -> List[str]:
        """Canonical names in registration order."""
        return list(self._commands)

    def module_commands(self) -> Dict[str, List[Command]]:
        """Visible commands grouped by module label, both sorted by name."""
        modules: Dict[str, List[Command]] = {}
        for cmd in self._commands.values():
            if cmd.hidden:
                continue
            modules.setdefault(cmd.module, []).append(cmd)

        return {
            module: sorted(cmds, key=lambda c: c.name)
            for module, cmds in sorted(modules.items())
        }

    def extend(self, cmds: Iterable[Command]) -> None:
        for cmd in cmds:
            self.add(cmd)

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)
