"""Alias table mapping alternate command tokens to canonical command names."""

import logging
from typing import Dict, Iterator, List, Tuple

from .exceptions import AliasConflictError, InvalidNameError
from .utils.names import GOOD_CMD_NAME_PATTERN, is_good_cmd_name

logger = logging.getLogger(__name__)


class Aliases:
    """Alias -> canonical name mapping, kept in registration order.

    The table only checks alias syntax and that one alias points at one name;
    checks that need the command table (target exists, no collision with a
    canonical name) are done by the owning registry.
    """

    def __init__(self) -> None:
        self._mapping: Dict[str, str] = {}

    def add_alias(self, name: str, alias: str) -> None:
        """Map ``alias`` to the canonical ``name``.

        Raises:
            InvalidNameError: If the alias does not match the name pattern
            AliasConflictError: If the alias already points at another name
        """
        if not is_good_cmd_name(alias):
            raise InvalidNameError(alias, kind="alias", pattern=GOOD_CMD_NAME_PATTERN)

        current = self._mapping.get(alias)
        if current is not None and current != name:
            raise AliasConflictError(
                f"the alias '{alias}' is already used by command '{current}'",
                alias=alias, target=name,
            )

        self._mapping[alias] = name
        logger.debug(f"add alias '{alias}' for command '{name}'")

    def add_aliases(self, name: str, *aliases: str) -> None:
        for alias in aliases:
            self.add_alias(name, alias)

    def resolve_alias(self, token: str) -> str:
        """Return the canonical name for an alias, or ``token`` itself."""
        return self._mapping.get(token, token)

    def has_alias(self, alias: str) -> bool:
        return alias in self._mapping

    def aliases_of(self, name: str) -> List[str]:
        return [alias for alias, target in self._mapping.items() if target == name]

    def items(self) -> List[Tuple[str, str]]:
        return list(self._mapping.items())

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._mapping))

    def __contains__(self, alias: str) -> bool:
        return alias in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)
