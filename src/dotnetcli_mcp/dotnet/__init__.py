"""Typed invocation of the .NET Core CLI.

Provides:
- Settings dataclasses for restore, build, pack, run, publish, test, clean,
  exec, nuget push and nuget delete
- Pure serialization of settings into ordered, correctly quoted arguments
- dotnet executable resolution
- Synchronous process execution with typed failures
"""

from .aliases import (
    dotnet_core_build,
    dotnet_core_clean,
    dotnet_core_execute,
    dotnet_core_nuget_delete,
    dotnet_core_nuget_push,
    dotnet_core_pack,
    dotnet_core_publish,
    dotnet_core_restore,
    dotnet_core_run,
    dotnet_core_test,
)
from .arguments import ArgumentBuilder, quote_argument
from .commands import DESCRIPTORS, CommandDescriptor, OptionKind, OptionSpec, serialize
from .context import DotNetCoreContext
from .errors import (
    ArgumentError,
    DotNetCoreError,
    ProcessStartError,
    ToolExecutionError,
    ToolNotFoundError,
)
from .executor import DotNetCoreExecutor
from .locator import ToolLocator
from .runner import ProcessRunner
from .settings import (
    DotNetCoreBuildSettings,
    DotNetCoreCleanSettings,
    DotNetCoreExecuteSettings,
    DotNetCoreMSBuildSettings,
    DotNetCoreNuGetDeleteSettings,
    DotNetCoreNuGetPushSettings,
    DotNetCorePackSettings,
    DotNetCorePublishSettings,
    DotNetCoreRestoreSettings,
    DotNetCoreRunSettings,
    DotNetCoreSettings,
    DotNetCoreTestSettings,
    DotNetCoreVerbosity,
)
from .state import BuildDiagnostic, ProcessResult, ToolResult

__all__ = [
    "ArgumentBuilder",
    "quote_argument",
    "CommandDescriptor",
    "OptionKind",
    "OptionSpec",
    "DESCRIPTORS",
    "serialize",
    "DotNetCoreContext",
    "DotNetCoreExecutor",
    "ToolLocator",
    "ProcessRunner",
    "DotNetCoreError",
    "ArgumentError",
    "ToolNotFoundError",
    "ProcessStartError",
    "ToolExecutionError",
    "DotNetCoreSettings",
    "DotNetCoreVerbosity",
    "DotNetCoreMSBuildSettings",
    "DotNetCoreRestoreSettings",
    "DotNetCoreBuildSettings",
    "DotNetCorePackSettings",
    "DotNetCoreRunSettings",
    "DotNetCorePublishSettings",
    "DotNetCoreTestSettings",
    "DotNetCoreCleanSettings",
    "DotNetCoreExecuteSettings",
    "DotNetCoreNuGetPushSettings",
    "DotNetCoreNuGetDeleteSettings",
    "BuildDiagnostic",
    "ProcessResult",
    "ToolResult",
    "dotnet_core_restore",
    "dotnet_core_build",
    "dotnet_core_pack",
    "dotnet_core_run",
    "dotnet_core_publish",
    "dotnet_core_test",
    "dotnet_core_clean",
    "dotnet_core_execute",
    "dotnet_core_nuget_push",
    "dotnet_core_nuget_delete",
]
