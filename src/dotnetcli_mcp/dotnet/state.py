"""Process and tool result types.

ProcessResult is what the runner hands back for one child process.
ToolResult is what an alias returns once the exit code has been checked.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DiagnosticSeverity(str, Enum):
    """MSBuild diagnostic severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class BuildDiagnostic:
    """Parsed MSBuild diagnostic (error/warning)."""

    severity: DiagnosticSeverity
    code: str
    message: str
    file: str | None = None
    line: int | None = None
    column: int | None = None
    project: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
        }
        if self.file:
            result["file"] = self.file
        if self.line is not None:
            result["line"] = self.line
        if self.column is not None:
            result["column"] = self.column
        if self.project:
            result["project"] = self.project
        return result


# Format: path(line,col): severity code: message [project]
MSBUILD_DIAGNOSTIC_PATTERN = re.compile(
    r"^(?P<file>[^(]+)\((?P<line>\d+),(?P<col>\d+)\):\s*"
    r"(?P<severity>error|warning|info)\s+(?P<code>\w+):\s*"
    r"(?P<message>.+?)(?:\s+\[(?P<project>[^\]]+)\])?$",
    re.IGNORECASE,
)

# Format without location: severity code: message
MSBUILD_SIMPLE_PATTERN = re.compile(
    r"^(?P<severity>error|warning|info)\s+(?P<code>\w+):\s*(?P<message>.+)$",
    re.IGNORECASE,
)


def parse_msbuild_output(output: str) -> list[BuildDiagnostic]:
    """Parse dotnet/MSBuild console output into structured diagnostics.

    Args:
        output: Captured console output

    Returns:
        List of parsed diagnostics, in output order
    """
    diagnostics: list[BuildDiagnostic] = []

    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue

        match = MSBUILD_DIAGNOSTIC_PATTERN.match(line)
        if match:
            diagnostics.append(
                BuildDiagnostic(
                    severity=DiagnosticSeverity(match.group("severity").lower()),
                    code=match.group("code"),
                    message=match.group("message"),
                    file=match.group("file").strip(),
                    line=int(match.group("line")),
                    column=int(match.group("col")),
                    project=match.group("project"),
                )
            )
            continue

        match = MSBUILD_SIMPLE_PATTERN.match(line)
        if match:
            diagnostics.append(
                BuildDiagnostic(
                    severity=DiagnosticSeverity(match.group("severity").lower()),
                    code=match.group("code"),
                    message=match.group("message"),
                )
            )

    return diagnostics


@dataclass
class ProcessResult:
    """Exit status of one child process.

    stdout/stderr are None when output was not captured.
    """

    exit_code: int
    stdout: str | None = None
    stderr: str | None = None
    duration_ms: float = 0.0

    @property
    def captured(self) -> bool:
        """Whether output streams were captured."""
        return self.stdout is not None or self.stderr is not None


@dataclass
class ToolResult:
    """Result of a successful alias invocation."""

    command: str
    command_line: str
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    working_directory: str | None = None
    duration_ms: float = 0.0
    diagnostics: list[BuildDiagnostic] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Parse diagnostics from output if not provided."""
        if not self.diagnostics and (self.stdout or self.stderr):
            self.diagnostics = parse_msbuild_output(self.stdout + "\n" + self.stderr)

    @property
    def success(self) -> bool:
        """Whether the tool exited with code zero."""
        return self.exit_code == 0

    @property
    def errors(self) -> list[BuildDiagnostic]:
        """Get only error diagnostics."""
        return [d for d in self.diagnostics if d.severity == DiagnosticSeverity.ERROR]

    @property
    def warnings(self) -> list[BuildDiagnostic]:
        """Get only warning diagnostics."""
        return [d for d in self.diagnostics if d.severity == DiagnosticSeverity.WARNING]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "success": self.success,
            "command": self.command,
            "commandLine": self.command_line,
            "exitCode": self.exit_code,
            "errorCount": len(self.errors),
            "warningCount": len(self.warnings),
            "durationMs": round(self.duration_ms, 2),
        }
        if self.working_directory:
            result["workingDirectory"] = self.working_directory
        if self.diagnostics:
            result["diagnostics"] = [d.to_dict() for d in self.diagnostics]
        if self.stdout:
            result["stdout"] = self.stdout
        if self.stderr:
            result["stderr"] = self.stderr
        return result

    def to_summary(self) -> str:
        """Generate human-readable summary."""
        status = f"[OK] dotnet {self.command} succeeded"
        if not self.success:
            status = f"[FAILED] dotnet {self.command} failed"

        parts = [
            status,
            f"  Command: {self.command_line}",
            f"  Duration: {self.duration_ms:.0f}ms",
        ]
        if self.errors:
            parts.append(f"  Errors: {len(self.errors)}")
        if self.warnings:
            parts.append(f"  Warnings: {len(self.warnings)}")

        for warn in self.warnings[:5]:
            location = f"{warn.file}({warn.line},{warn.column or 0}): " if warn.file else ""
            parts.append(f"    {location}{warn.code}: {warn.message}")

        if len(self.warnings) > 5:
            parts.append(f"    ... and {len(self.warnings) - 5} more warnings")

        return "\n".join(parts)
