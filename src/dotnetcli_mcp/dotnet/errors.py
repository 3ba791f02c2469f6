"""Exceptions raised by the dotnet CLI invocation core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .state import BuildDiagnostic


class DotNetCoreError(Exception):
    """Base exception for dotnet CLI invocation errors."""

    pass


class ArgumentError(DotNetCoreError, ValueError):
    """Raised when a required input is missing or malformed.

    Always raised before the tool is located or a process is started.
    """

    pass


class ToolNotFoundError(DotNetCoreError, FileNotFoundError):
    """Raised when the dotnet executable cannot be resolved."""

    def __init__(self, tool_name: str, searched: list[str] | None = None):
        self.tool_name = tool_name
        self.searched = searched or []
        message = f"Could not locate executable: {tool_name}"
        if self.searched:
            message += f" (searched: {', '.join(self.searched)})"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class ProcessStartError(DotNetCoreError, OSError):
    """Raised when the OS refuses to start the resolved executable."""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        self.reason = reason
        super().__init__(f"Failed to start {executable}: {reason}")

    def __str__(self) -> str:
        return self.args[0]


class ToolExecutionError(DotNetCoreError):
    """Raised when the tool ran and exited with a non-zero code."""

    def __init__(
        self,
        tool_name: str,
        exit_code: int,
        command: str = "",
        diagnostics: list[BuildDiagnostic] | None = None,
    ):
        super().__init__(f"{tool_name}: Process returned an error (exit code {exit_code}).")
        self.tool_name = tool_name
        self.exit_code = exit_code
        self.command = command
        self.diagnostics = diagnostics or []

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "tool": self.tool_name,
            "exitCode": self.exit_code,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
        if self.command:
            result["command"] = self.command
        return result
