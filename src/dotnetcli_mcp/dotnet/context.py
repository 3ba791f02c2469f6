"""Build context exposing one method per dotnet command.

Usage:
    context = DotNetCoreContext()
    context.restore()
    context.build("./src/App", DotNetCoreBuildSettings(configuration="Release"))
    context.nuget_push("./artifacts/App.1.0.0.nupkg", DotNetCoreNuGetPushSettings(
        source="https://api.nuget.org/v3/index.json", api_key=key,
    ))
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from . import commands
from .commands import ArgumentsInput
from .executor import DotNetCoreExecutor
from .locator import ToolLocator
from .runner import ProcessRunner
from .settings import (
    DotNetCoreBuildSettings,
    DotNetCoreCleanSettings,
    DotNetCoreExecuteSettings,
    DotNetCoreNuGetDeleteSettings,
    DotNetCoreNuGetPushSettings,
    DotNetCorePackSettings,
    DotNetCorePublishSettings,
    DotNetCoreRestoreSettings,
    DotNetCoreRunSettings,
    DotNetCoreTestSettings,
)
from .state import ToolResult

PathInput = str | os.PathLike[str]


class DotNetCoreContext:
    """Explicit context holding the collaborators every alias needs.

    Omitting settings on any alias runs the command with every option unset.
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        locator: ToolLocator | None = None,
        environment: Mapping[str, str] | None = None,
        capture_output: bool = False,
        default_tool_path: str | None = None,
    ):
        self.environment: dict[str, str] = dict(
            os.environ if environment is None else environment
        )
        self.runner = runner or ProcessRunner()
        self.locator = locator or ToolLocator(self.environment, default_tool_path)
        self.capture_output = capture_output
        self._executor = DotNetCoreExecutor(
            self.runner, self.locator, self.environment, capture_output
        )

    def restore(
        self,
        root: PathInput | None = None,
        settings: DotNetCoreRestoreSettings | None = None,
    ) -> ToolResult:
        """Restore NuGet packages for root (or the current directory)."""
        return self._executor.execute(commands.RESTORE, {"root": root}, settings)

    def build(
        self, project: PathInput, settings: DotNetCoreBuildSettings | None = None
    ) -> ToolResult:
        """Build a project or solution."""
        return self._executor.execute(commands.BUILD, {"project": project}, settings)

    def pack(
        self, project: PathInput, settings: DotNetCorePackSettings | None = None
    ) -> ToolResult:
        """Package a project into a NuGet package."""
        return self._executor.execute(commands.PACK, {"project": project}, settings)

    def run(
        self,
        project: PathInput | None = None,
        arguments: ArgumentsInput = None,
        settings: DotNetCoreRunSettings | None = None,
    ) -> ToolResult:
        """Run a project, passing arguments after `--`."""
        return self._executor.execute(commands.RUN, {"project": project}, settings, arguments)

    def publish(
        self, project: PathInput, settings: DotNetCorePublishSettings | None = None
    ) -> ToolResult:
        """Publish a project for deployment."""
        return self._executor.execute(commands.PUBLISH, {"project": project}, settings)

    def test(
        self,
        project: PathInput | None = None,
        settings: DotNetCoreTestSettings | None = None,
    ) -> ToolResult:
        """Run unit tests for project (or the current directory)."""
        return self._executor.execute(commands.TEST, {"project": project}, settings)

    def clean(
        self, project: PathInput, settings: DotNetCoreCleanSettings | None = None
    ) -> ToolResult:
        """Clean a project's build output."""
        return self._executor.execute(commands.CLEAN, {"project": project}, settings)

    def execute(
        self,
        assembly_path: PathInput,
        arguments: ArgumentsInput = None,
        settings: DotNetCoreExecuteSettings | None = None,
    ) -> ToolResult:
        """Execute a compiled assembly with `dotnet exec`."""
        return self._executor.execute(
            commands.EXECUTE, {"assembly_path": assembly_path}, settings, arguments
        )

    def nuget_push(
        self, package_name: PathInput, settings: DotNetCoreNuGetPushSettings | None = None
    ) -> ToolResult:
        """Push one or more packages (globs allowed) to a feed."""
        return self._executor.execute(
            commands.NUGET_PUSH, {"package_name": package_name}, settings
        )

    def nuget_delete(
        self,
        package_name: str | None = None,
        package_version: str | None = None,
        settings: DotNetCoreNuGetDeleteSettings | None = None,
    ) -> ToolResult:
        """Delete (unlist) a package version from a feed.

        Without settings.non_interactive dotnet asks for confirmation, so the
        process always inherits the console in that case.
        """
        return self._executor.execute(
            commands.NUGET_DELETE,
            {"package_name": package_name, "package_version": package_version},
            settings,
        )
