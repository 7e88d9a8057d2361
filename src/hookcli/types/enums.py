"""Enumerations for the hookcli application framework.

This module contains the closed vocabularies used across the framework:
lifecycle event names, result codes and verbosity levels.

Event names inherit from str and Enum so a member can be used anywhere a plain
event name string is accepted, and so hook tables keyed by either form agree.
"""

import logging
from enum import Enum, IntEnum
from typing import List, Union


class HookEvent(str, Enum):
    """Lifecycle event names fired by the application and its commands.

    Relative order across one successful run:

        APP_INIT_AFTER (once, at setup)
        -> GLOBAL_OPTS_PARSED -> APP_PREPARED_AFTER
        -> CMD_INIT_AFTER (per command, at registration)
        -> APP_RUN_BEFORE -> CMD_RUN_BEFORE -> CMD_OPTS_PARSED -> CMD_EXEC_BEFORE
        -> (command body)
        -> CMD_EXEC_AFTER | CMD_EXEC_ERROR
        -> CMD_RUN_AFTER | CMD_RUN_ERROR
        -> APP_RUN_AFTER | APP_RUN_ERROR

    The not-found variants fire in place of the run sequence when resolution
    fails.
    """
    APP_INIT_AFTER = "app.init.after"
    GLOBAL_OPTS_PARSED = "gOpts.parsed"
    APP_PREPARED_AFTER = "app.prepared.after"

    APP_RUN_BEFORE = "app.run.before"
    APP_RUN_AFTER = "app.run.after"
    APP_RUN_ERROR = "app.run.error"

    CMD_INIT_AFTER = "cmd.init.after"
    CMD_OPTS_PARSED = "cmd.opts.parsed"

    CMD_RUN_BEFORE = "cmd.run.before"
    CMD_RUN_AFTER = "cmd.run.after"
    CMD_RUN_ERROR = "cmd.run.error"

    CMD_EXEC_BEFORE = "cmd.exec.before"
    CMD_EXEC_AFTER = "cmd.exec.after"
    CMD_EXEC_ERROR = "cmd.exec.error"

    # app or sub command not found
    CMD_NOT_FOUND = "cmd.not.found"
    APP_CMD_NOT_FOUND = "app.cmd.not.found"
    CMD_SUB_NOT_FOUND = "cmd.sub.not.found"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: Union[str, "HookEvent"]) -> "HookEvent":
        """Parse an event name from string.

        Args:
            value: Event name, or an existing member

        Returns:
            HookEvent enum value

        Raises:
            ValueError: If value is not a known event name
        """
        try:
            return cls(value)
        except ValueError:
            valid_values = [event.value for event in cls]
            raise ValueError(f"Invalid hook event '{value}'. Valid values: {valid_values}")

    @classmethod
    def get_all_events(cls) -> List[str]:
        """Get all event name values."""
        return [event.value for event in cls]

    @classmethod
    def get_not_found_events(cls) -> List["HookEvent"]:
        """Get the events fired when a command cannot be resolved."""
        return [cls.CMD_NOT_FOUND, cls.APP_CMD_NOT_FOUND, cls.CMD_SUB_NOT_FOUND]

    def is_error_event(self) -> bool:
        """Check whether the event reports a failure."""
        return self.value.endswith(".error")


class ExitCode(IntEnum):
    """Result codes of a run.

    Values:
        OK: success
        ERR: generic failure
        GOON: internal "continue processing" signal, never a process exit code
    """
    OK = 0
    ERR = 2
    GOON = -1

    def is_exit_code(self) -> bool:
        """Check whether the value may be handed to the operating system."""
        return self is not ExitCode.GOON


# custom logging level below DEBUG for the noisiest output
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class VerbLevel(IntEnum):
    """Verbosity levels accepted by the global ``--verbose`` option."""
    QUIET = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    CRAZY = 5

    @classmethod
    def from_value(cls, value: Union[int, str]) -> "VerbLevel":
        """Parse a verbosity level from a number or a level name.

        Raises:
            ValueError: If value is not a valid verbosity level
        """
        if isinstance(value, str) and not value.lstrip("-").isdigit():
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Invalid verbose level '{value}'. Valid values: {cls.get_names()}")

        try:
            return cls(int(value))
        except ValueError:
            raise ValueError(f"Invalid verbose level '{value}'. Valid range: 0-{int(cls.CRAZY)}")

    @classmethod
    def get_names(cls) -> List[str]:
        """Get all level names in lower case."""
        return [level.name.lower() for level in cls]

    def to_logging_level(self) -> int:
        """Map the verbosity to a stdlib logging level."""
        mapping = {
            VerbLevel.QUIET: logging.CRITICAL + 1,
            VerbLevel.ERROR: logging.ERROR,
            VerbLevel.WARN: logging.WARNING,
            VerbLevel.INFO: logging.INFO,
            VerbLevel.DEBUG: logging.DEBUG,
            VerbLevel.CRAZY: TRACE,
        }
        return mapping[self]
