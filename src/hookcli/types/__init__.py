"""Type definitions for the hookcli framework.

This module re-exports the enumerations used by the application and commands.
"""

from typing import Any, Callable, Dict, List

from .enums import TRACE, ExitCode, HookEvent, VerbLevel

# Command handler: func(cmd, args); raise to report failure
CommandFunc = Callable[[Any, List[str]], Any]

# Fallback handler of the application: func(app, args)
AppFunc = Callable[[Any, List[str]], Any]

# Free-form data bag carried by hook contexts
HookData = Dict[str, Any]

__all__ = [
    "HookEvent",
    "ExitCode",
    "VerbLevel",
    "TRACE",
    "CommandFunc",
    "AppFunc",
    "HookData",
]
