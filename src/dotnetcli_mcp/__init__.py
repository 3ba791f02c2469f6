"""dotnetcli-mcp - typed .NET CLI invocation for build scripts and MCP clients."""

from .dotnet import (
    ArgumentError,
    DotNetCoreBuildSettings,
    DotNetCoreCleanSettings,
    DotNetCoreContext,
    DotNetCoreExecuteSettings,
    DotNetCoreNuGetDeleteSettings,
    DotNetCoreNuGetPushSettings,
    DotNetCorePackSettings,
    DotNetCorePublishSettings,
    DotNetCoreRestoreSettings,
    DotNetCoreRunSettings,
    DotNetCoreTestSettings,
    DotNetCoreVerbosity,
    ProcessStartError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolResult,
)

__version__ = "0.1.0"

__all__ = [
    "DotNetCoreContext",
    "DotNetCoreVerbosity",
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
    "ToolResult",
    "ArgumentError",
    "ToolNotFoundError",
    "ProcessStartError",
    "ToolExecutionError",
]
