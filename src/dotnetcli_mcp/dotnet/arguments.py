"""Ordered command-line argument builder.

Keeps two views of the same arguments:
- tokens(): the literal argv handed to the child process (never quoted)
- render(): a single command line with quoting applied, for logs and results
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Final

REDACTED: Final[str] = "[REDACTED]"

# Anything outside this set forces quoting in the rendered command line
_SAFE_UNQUOTED: Final[re.Pattern[str]] = re.compile(r"^[\w@%+=:,./-]+$")


def quote_argument(value: str) -> str:
    """Wrap value in double quotes when a shell would split or expand it.

    Backslashes and double quotes inside the value are escaped so that
    shlex.split() returns the original string.
    """
    if value and _SAFE_UNQUOTED.match(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class Argument:
    """A single argv token."""

    text: str
    quoted: bool = False
    secret: bool = False

    def render(self, safe: bool = False) -> str:
        """Render for a command line, quoting or masking as needed."""
        if self.secret and safe:
            return REDACTED
        if self.quoted:
            return quote_argument(self.text)
        return self.text


class ArgumentBuilder:
    """Builds the ordered argument list for a dotnet invocation."""

    def __init__(self, arguments: Iterable[Argument] | None = None):
        self._arguments: list[Argument] = list(arguments or [])

    def append(self, text: str) -> ArgumentBuilder:
        """Append a literal token (verb, flag)."""
        self._arguments.append(Argument(text))
        return self

    def append_quoted(self, text: str) -> ArgumentBuilder:
        """Append a value token that is quoted when rendered."""
        self._arguments.append(Argument(text, quoted=True))
        return self

    def append_secret(self, text: str) -> ArgumentBuilder:
        """Append a value token that is masked in safe renderings."""
        self._arguments.append(Argument(text, quoted=True, secret=True))
        return self

    def append_switch(self, flag: str, value: str, secret: bool = False) -> ArgumentBuilder:
        """Append `flag value` as two tokens."""
        self.append(flag)
        if secret:
            return self.append_secret(value)
        return self.append_quoted(value)

    def prepend(self, text: str) -> ArgumentBuilder:
        """Insert a literal token at the front."""
        self._arguments.insert(0, Argument(text))
        return self

    def extend(self, other: ArgumentBuilder) -> ArgumentBuilder:
        """Append every argument of another builder."""
        self._arguments.extend(other)
        return self

    def copy(self) -> ArgumentBuilder:
        """Return an independent copy."""
        return ArgumentBuilder(self._arguments)

    def tokens(self) -> list[str]:
        """Return the raw argv tokens."""
        return [arg.text for arg in self._arguments]

    def render(self, safe: bool = False) -> str:
        """Render as a single quoted command line.

        Args:
            safe: Mask secret values (API keys) for logging
        """
        return " ".join(arg.render(safe=safe) for arg in self._arguments)

    @classmethod
    def from_string(cls, command_line: str) -> ArgumentBuilder:
        """Split a free-form argument string the way a POSIX shell would."""
        builder = cls()
        for token in shlex.split(command_line):
            builder.append_quoted(token)
        return builder

    def __iter__(self) -> Iterator[Argument]:
        return iter(self._arguments)

    def __len__(self) -> int:
        return len(self._arguments)

    def __bool__(self) -> bool:
        return bool(self._arguments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArgumentBuilder):
            return NotImplemented
        return self._arguments == other._arguments

    def __repr__(self) -> str:
        return f"ArgumentBuilder({self.render(safe=True)!r})"
