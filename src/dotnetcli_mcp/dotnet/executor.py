"""Shared execution routine for every dotnet command.

validate -> default settings -> serialize -> locate tool -> run -> check exit code
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from .commands import ArgumentsInput, CommandDescriptor, serialize
from .errors import ArgumentError, ToolExecutionError
from .locator import DOTNET_TOOL_NAME, ToolLocator
from .runner import ProcessRunner
from .settings import DotNetCoreSettings
from .state import ToolResult, parse_msbuild_output

logger = logging.getLogger(__name__)


class DotNetCoreExecutor:
    """Runs one dotnet command described by a CommandDescriptor."""

    def __init__(
        self,
        runner: ProcessRunner,
        locator: ToolLocator,
        environment: Mapping[str, str] | None = None,
        capture_output: bool = False,
    ):
        self._runner = runner
        self._locator = locator
        self._environment = dict(environment) if environment is not None else None
        self._capture_output = capture_output

    def _child_environment(self, settings: DotNetCoreSettings) -> dict[str, str] | None:
        if not settings.environment_variables:
            return self._environment
        merged = dict(os.environ if self._environment is None else self._environment)
        merged.update(settings.environment_variables)
        return merged

    def execute(
        self,
        descriptor: CommandDescriptor,
        inputs: Mapping[str, Any],
        settings: DotNetCoreSettings | None = None,
        arguments: ArgumentsInput = None,
    ) -> ToolResult:
        """Execute a dotnet command.

        Args:
            descriptor: Command to run
            inputs: Positional inputs (project, assembly, package, ...)
            settings: Command settings; an all-unset instance when None
            arguments: Free-form trailing arguments for run/exec

        Returns:
            Tool result for a zero exit code

        Raises:
            ArgumentError: If a required input is missing (before any I/O)
            ToolNotFoundError: If dotnet cannot be located
            ProcessStartError: If the process cannot be started
            ToolExecutionError: If dotnet exits with a non-zero code
        """
        descriptor.validate(inputs)

        if settings is None:
            settings = descriptor.settings_type()
        elif not isinstance(settings, descriptor.settings_type):
            raise ArgumentError(
                f"{descriptor.tool_name} expects {descriptor.settings_type.__name__}, "
                f"got {type(settings).__name__}"
            )

        builder = serialize(descriptor, inputs, settings, arguments)
        executable = self._locator.resolve(DOTNET_TOOL_NAME, settings.tool_path)

        working_directory = (
            os.path.abspath(settings.working_directory) if settings.working_directory else None
        )
        capture = self._capture_output and not descriptor.may_prompt(settings)
        command_line = f"{executable} {builder.render(safe=True)}"
        logger.info(f"Executing: {command_line}")

        process = self._runner.run(
            executable,
            builder.tokens(),
            working_directory=working_directory,
            environment=self._child_environment(settings),
            capture_output=capture,
        )

        stdout = process.stdout or ""
        stderr = process.stderr or ""

        if process.exit_code != 0:
            logger.warning(f"{descriptor.tool_name} failed with exit code {process.exit_code}")
            raise ToolExecutionError(
                descriptor.tool_name,
                process.exit_code,
                command=command_line,
                diagnostics=parse_msbuild_output(stdout + "\n" + stderr),
            )

        return ToolResult(
            command=descriptor.name,
            command_line=command_line,
            exit_code=process.exit_code,
            stdout=stdout,
            stderr=stderr,
            working_directory=working_directory,
            duration_ms=process.duration_ms,
        )
