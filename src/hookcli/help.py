"""Help text templates and the ``{$name}`` help variable replacer."""

import re
from typing import Dict, Optional

# help variable format, default supported vars:
#   "{$binName}" "{$cmd}" "{$fullCmd}" "{$workDir}"
_HELP_VAR_RE = re.compile(r"\{\$(\w+)\}")

# application help, rendered with str.format; doubled braces are literal
APP_HELP_TEMPLATE = """{desc} (Version: {version})
Usage:
  {{$binName}} [Global Options...] {{command}} [--option ...] [argument ...]

Global Options:
{global_options}

Available Commands:{commands}

  {help_name} Display help information

Use "{{$binName}} {{COMMAND}} -h" for more information about a command
"""

# command help
CMD_HELP_TEMPLATE = """{desc}

Usage:
  {{$binName}} [Global Options...] {{$cmd}} [--option ...] [argument ...]
{aliases}{subcommands}{options}{examples}{help}"""

HELP_COMMAND_USAGE = """Display help message for application or command.

Usage:
  {$binName} {COMMAND} --help OR {$binName} help {COMMAND}
"""


class HelpReplacer:
    """String variable replacer applied to rendered help text."""

    def __init__(self, replaces: Optional[Dict[str, str]] = None) -> None:
        self._replaces: Dict[str, str] = {}
        if replaces:
            self.add_replaces(replaces)

    def add_replace(self, name: str, value: str) -> None:
        self._replaces[name] = value

    def add_replaces(self, variables: Dict[str, str]) -> None:
        """Add multiple help variables."""
        for name, value in variables.items():
            self.add_replace(name, value)

    def get_replace(self, name: str) -> str:
        return self._replaces.get(name, "")

    def replaces(self) -> Dict[str, str]:
        return dict(self._replaces)

    def replace_pairs(self, text: str) -> str:
        """Replace the help variables in ``text``.

        Text without any ``{$`` is returned as is; unknown variables are left
        untouched.
        """
        if "{$" not in text:
            return text

        return _HELP_VAR_RE.sub(lambda m: self._replaces.get(m.group(1), m.group(0)), text)
