"""Free-function aliases over DotNetCoreContext.

For build scripts that prefer `dotnet_core_build(context, "./src/App")` over
method calls. Each function checks the context and delegates.
"""

from __future__ import annotations

from .commands import ArgumentsInput
from .context import DotNetCoreContext, PathInput
from .errors import ArgumentError
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


def _require(context: DotNetCoreContext | None) -> DotNetCoreContext:
    if context is None:
        raise ArgumentError("context is required")
    return context


def dotnet_core_restore(
    context: DotNetCoreContext,
    root: PathInput | None = None,
    settings: DotNetCoreRestoreSettings | None = None,
) -> ToolResult:
    return _require(context).restore(root, settings)


def dotnet_core_build(
    context: DotNetCoreContext,
    project: PathInput,
    settings: DotNetCoreBuildSettings | None = None,
) -> ToolResult:
    return _require(context).build(project, settings)


def dotnet_core_pack(
    context: DotNetCoreContext,
    project: PathInput,
    settings: DotNetCorePackSettings | None = None,
) -> ToolResult:
    return _require(context).pack(project, settings)


def dotnet_core_run(
    context: DotNetCoreContext,
    project: PathInput | None = None,
    arguments: ArgumentsInput = None,
    settings: DotNetCoreRunSettings | None = None,
) -> ToolResult:
    return _require(context).run(project, arguments, settings)


def dotnet_core_publish(
    context: DotNetCoreContext,
    project: PathInput,
    settings: DotNetCorePublishSettings | None = None,
) -> ToolResult:
    return _require(context).publish(project, settings)


def dotnet_core_test(
    context: DotNetCoreContext,
    project: PathInput | None = None,
    settings: DotNetCoreTestSettings | None = None,
) -> ToolResult:
    return _require(context).test(project, settings)


def dotnet_core_clean(
    context: DotNetCoreContext,
    project: PathInput,
    settings: DotNetCoreCleanSettings | None = None,
) -> ToolResult:
    return _require(context).clean(project, settings)


def dotnet_core_execute(
    context: DotNetCoreContext,
    assembly_path: PathInput,
    arguments: ArgumentsInput = None,
    settings: DotNetCoreExecuteSettings | None = None,
) -> ToolResult:
    return _require(context).execute(assembly_path, arguments, settings)


def dotnet_core_nuget_push(
    context: DotNetCoreContext,
    package_name: PathInput,
    settings: DotNetCoreNuGetPushSettings | None = None,
) -> ToolResult:
    return _require(context).nuget_push(package_name, settings)


def dotnet_core_nuget_delete(
    context: DotNetCoreContext,
    package_name: str | None = None,
    package_version: str | None = None,
    settings: DotNetCoreNuGetDeleteSettings | None = None,
) -> ToolResult:
    return _require(context).nuget_delete(package_name, package_version, settings)
