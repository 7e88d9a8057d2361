"""Name validation rules for commands, aliases, options and arguments."""

import re
from typing import Tuple

# match a good option, argument name
GOOD_NAME_PATTERN = r"^[a-zA-Z][\w-]*$"
# match a good command name or alias
GOOD_CMD_NAME_PATTERN = r"^[a-zA-Z][\w-]*$"
# match command id. eg: "self:init"
GOOD_CMD_ID_PATTERN = r"^[a-zA-Z][\w:-]*$"

_good_name = re.compile(GOOD_NAME_PATTERN, re.ASCII)
_good_cmd_name = re.compile(GOOD_CMD_NAME_PATTERN, re.ASCII)
_good_cmd_id = re.compile(GOOD_CMD_ID_PATTERN, re.ASCII)


def is_good_name(name: str) -> bool:
    """Check an option or argument name."""
    return bool(name) and _good_name.fullmatch(name) is not None


def is_good_cmd_name(name: str) -> bool:
    """Check a command name or alias, no namespace separator allowed."""
    return bool(name) and _good_cmd_name.fullmatch(name) is not None


def is_good_cmd_id(name: str) -> bool:
    """Check a command identifier, which may be namespaced like ``group:action``."""
    return bool(name) and _good_cmd_id.fullmatch(name) is not None


def split_cmd_id(name: str) -> Tuple[str, str]:
    """Split ``group:action`` into ``("group", "action")``; plain names give ``("", name)``."""
    module, sep, action = name.partition(":")
    if not sep:
        return "", name
    return module, action
