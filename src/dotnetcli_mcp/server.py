"""MCP Server exposing the dotnet CLI aliases as tools."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import Context, FastMCP
from pydantic import AnyUrl

from .dotnet import (
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
    ToolExecutionError,
    ToolResult,
)
from .resources import register_resources
from .utils.project import get_project_root

logger = logging.getLogger(__name__)

LAST_RESULT_URI = "dotnet://last-result"

# Global context (single client mode)
_context: DotNetCoreContext | None = None
_last_result: dict[str, Any] | None = None

# dotnet commands block; one worker keeps them from overlapping
_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="dotnet")


def get_context() -> DotNetCoreContext:
    """Get or create the build context used by every tool."""
    global _context
    if _context is None:
        _context = DotNetCoreContext(
            capture_output=True,
            default_tool_path=os.environ.get("DOTNET_CLI_PATH"),
        )
    return _context


def set_context(context: DotNetCoreContext | None) -> None:
    """Replace the build context (None resets to the default on next use)."""
    global _context
    _context = context


def get_last_result() -> dict[str, Any] | None:
    """Result dictionary of the most recent command, success or failure."""
    return _last_result


def resolve_input_path(path: str | None, root: Path | None) -> str | None:
    """Make a tool path argument absolute against the project root.

    Globs and relative paths are joined with the root; absolute paths and
    None pass through unchanged.
    """
    if path is None or root is None or os.path.isabs(path):
        return path
    return os.path.join(str(root), path)


def to_verbosity(value: str | None) -> DotNetCoreVerbosity | None:
    """Convert a tool argument into a verbosity level."""
    if value is None:
        return None
    try:
        return DotNetCoreVerbosity(value.lower())
    except ValueError:
        allowed = ", ".join(v.value for v in DotNetCoreVerbosity)
        raise ValueError(f"Invalid verbosity: {value} (expected one of: {allowed})") from None


async def run_alias(call: Callable[[], ToolResult], ctx: Context | None = None) -> dict:
    """Run a blocking alias in the worker thread and wrap its outcome.

    Returns:
        {"success": True, "data": ..., "summary": ...} or
        {"success": False, "error": ..., ["data": ...]}
    """
    global _last_result
    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(_executor, call)
    except ToolExecutionError as e:
        _last_result = e.to_dict()
        await notify_result_changed(ctx)
        return {"success": False, "error": str(e), "data": _last_result}
    except Exception as e:
        logger.warning(f"dotnet command failed: {e}")
        return {"success": False, "error": str(e)}

    _last_result = result.to_dict()
    await notify_result_changed(ctx)
    return {"success": True, "data": _last_result, "summary": result.to_summary()}


async def notify_result_changed(ctx: Context | None) -> None:
    """Notify client that the last-result resource has changed."""
    if ctx is None:
        return
    try:
        await ctx.session.send_resource_updated(AnyUrl(LAST_RESULT_URI))
    except Exception as e:
        logger.debug(f"Resource update notification failed: {e}")


def create_server(
    project_path: str | None = None,
    context: DotNetCoreContext | None = None,
) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        project_path: Default root for relative paths and working directory.
            MCP client roots take precedence when the client provides them.
        context: Build context to use (created from the environment if omitted)
    """
    if context is not None:
        set_context(context)
    dotnet = get_context()
    mcp = FastMCP("dotnetcli-mcp")

    async def workspace(ctx: Context) -> Path | None:
        root = await get_project_root(ctx)
        if root is None and project_path:
            root = Path(project_path)
        return root

    # ============== Build Tools ==============

    @mcp.tool()
    async def dotnet_restore(
        ctx: Context,
        root: str | None = None,
        sources: list[str] | None = None,
        packages_directory: str | None = None,
        config_file: str | None = None,
        runtime: str | None = None,
        no_cache: bool | None = None,
        disable_parallel: bool | None = None,
        ignore_failed_sources: bool | None = None,
        force: bool | None = None,
        verbosity: str | None = None,
    ) -> dict:
        """
        Restore NuGet dependencies with `dotnet restore`.

        Args:
            root: Project, solution or folder to restore (defaults to the project root)
            sources: NuGet package sources to use
            packages_directory: Directory to restore packages into
            config_file: NuGet.config file to use
            runtime: Runtime identifier to restore for (e.g. linux-x64)
            no_cache: Do not cache HTTP requests
            disable_parallel: Restore projects one at a time
            ignore_failed_sources: Treat package source failures as warnings
            force: Force re-evaluation of all dependencies
            verbosity: quiet, minimal, normal, detailed or diagnostic
        """
        base = await workspace(ctx)
        return await run_alias(
            lambda: dotnet.restore(
                resolve_input_path(root, base),
                DotNetCoreRestoreSettings(
                    working_directory=str(base) if base else None,
                    sources=sources,
                    packages_directory=resolve_input_path(packages_directory, base),
                    config_file=resolve_input_path(config_file, base),
                    runtime=runtime,
                    no_cache=no_cache,
                    disable_parallel=disable_parallel,
                    ignore_failed_sources=ignore_failed_sources,
                    force=force,
                    verbosity=to_verbosity(verbosity),
                ),
            ),
            ctx,
        )

    @mcp.tool()
    async def dotnet_build(
        ctx: Context,
        project: str,
        configuration: str | None = None,
        framework: str | None = None,
        runtime: str | None = None,
        output_directory: str | None = None,
        version_suffix: str | None = None,
        no_restore: bool | None = None,
        no_incremental: bool | None = None,
        warnings_as_errors: list[str] | None = None,
        msbuild_properties: dict[str, str] | None = None,
        verbosity: str | None = None,
    ) -> dict:
        """
        Build a project or solution with `dotnet build`.

        Errors and warnings are parsed from MSBuild output into diagnostics.

        Args:
            project: Path to .csproj/.sln or project directory
            configuration: Build configuration (Debug/Release)
            framework: Target framework moniker (e.g. net8.0)
            runtime: Runtime identifier (e.g. win-x64)
            output_directory: Output directory
            version_suffix: Version suffix ($(VersionSuffix))
            no_restore: Skip the implicit restore
            no_incremental: Force a full rebuild
            warnings_as_errors: Warning codes to treat as errors
            msbuild_properties: MSBuild properties passed as --property:Name=Value
            verbosity: quiet, minimal, normal, detailed or diagnostic
        """
        base = await workspace(ctx)
        return await run_alias(
            lambda: dotnet.build(
                resolve_input_path(project, base),
                DotNetCoreBuildSettings(
                    working_directory=str(base) if base else None,
                    configuration=configuration,
                    framework=framework,
                    runtime=runtime,
                    output_directory=resolve_input_path(output_directory, base),
                    version_suffix=version_suffix,
                    no_restore=no_restore,
                    no_incremental=no_incremental,
                    warnings_as_errors=warnings_as_errors,
                    msbuild_properties=msbuild_properties,
                    verbosity=to_verbosity(verbosity),
                ),
            ),
            ctx,
        )

    @mcp.tool()
    async def dotnet_pack(
        ctx: Context,
        project: str,
        configuration: str | None = None,
        output_directory: str | None = None,
        version_suffix: str | None = None,
        no_build: bool | None = None,
        no_restore: bool | None = None,
        include_symbols: bool | None = None,
        include_source: bool | None = None,
        msbuild_properties: dict[str, str] | None = None,
        verbosity: str | None = None,
    ) -> dict:
        """
        Create NuGet packages with `dotnet pack`.

        Args:
            project: Path to .csproj/.sln or project directory
            configuration: Build configuration (Debug/Release)
            output_directory: Directory for the .nupkg files
            version_suffix: Version suffix ($(VersionSuffix))
            no_build: Pack without building first
            no_restore: Skip the implicit restore
            include_symbols: Also create symbol packages
            include_source: Include source files in the symbol package
            msbuild_properties: MSBuild properties passed as --property:Name=Value
            verbosity: quiet, minimal, normal, detailed or diagnostic
        """
        base = await workspace(ctx)
        return await run_alias(
            lambda: dotnet.pack(
                resolve_input_path(project, base),
                DotNetCorePackSettings(
                    working_directory=str(base) if base else None,
                    configuration=configuration,
                    output_directory=resolve_input_path(output_directory, base),
                    version_suffix=version_suffix,
                    no_build=no_build,
                    no_restore=no_restore,
                    include_symbols=include_symbols,
                    include_source=include_source,
                    msbuild_properties=msbuild_properties,
                    verbosity=to_verbosity(verbosity),
                ),
            ),
            ctx,
        )

    @mcp.tool()
    async def dotnet_run(
        ctx: Context,
        project: str | None = None,
        args: list[str] | None = None,
        configuration: str | None = None,
        framework: str | None = None,
        launch_profile: str | None = None,
        no_build: bool | None = None,
        no_restore: bool | None = None,
    ) -> dict:
        """
        Build and run a project with `dotnet run`, returning its output.

        The call blocks until the program exits. Use it for console tools and
        short-lived programs, not for servers.

        Args:
            project: Project to run (defaults to the project in the root)
            args: Arguments passed to the program after `--`
            configuration: Build configuration (Debug/Release)
            framework: Target framework moniker
            launch_profile: launchSettings.json profile to use
            no_build: Run without building
            no_restore: Skip the implicit restore
        """
        base = await workspace(ctx)
        return await run_alias(
            lambda: dotnet.run(
                resolve_input_path(project, base),
                args,
                DotNetCoreRunSettings(
                    working_directory=str(base) if base else None,
                    configuration=configuration,
                    framework=framework,
                    launch_profile=launch_profile,
                    no_build=no_build,
                    no_restore=no_restore,
                ),
            ),
            ctx,
        )

    @mcp.tool()
    async def dotnet_publish(
        ctx: Context,
        project: str,
        configuration: str | None = None,
        framework: str | None = None,
        runtime: str | None = None,
        output_directory: str | None = None,
        self_contained: bool | None = None,
        no_build: bool | None = None,
        no_restore: bool | None = None,
        msbuild_properties: dict[str, str] | None = None,
        verbosity: str | None = None,
    ) -> dict:
        """
        Publish a project for deployment with `dotnet publish`.

        Args:
            project: Path to .csproj/.sln or project directory
            configuration: Build configuration (Debug/Release)
            framework: Target framework moniker
            runtime: Runtime identifier (e.g. linux-x64)
            output_directory: Publish directory
            self_contained: Bundle the .NET runtime with the app
            no_build: Publish without building
            no_restore: Skip the implicit restore
            msbuild_properties: MSBuild properties passed as --property:Name=Value
            verbosity: quiet, minimal, normal, detailed or diagnostic
        """
        base = await workspace(ctx)
        return await run_alias(
            lambda: dotnet.publish(
                resolve_input_path(project, base),
                DotNetCorePublishSettings(
                    working_directory=str(base) if base else None,
                    configuration=configuration,
                    framework=framework,
                    runtime=runtime,
                    output_directory=resolve_input_path(output_directory, base),
                    self_contained=self_contained,
                    no_build=no_build,
                    no_restore=no_restore,
                    msbuild_properties=msbuild_properties,
                    verbosity=to_verbosity(verbosity),
                ),
            ),
            ctx,
        )

    @mcp.tool()
    async def dotnet_test(
        ctx: Context,
        project: str | None = None,
        configuration: str | None = None,
        framework: str | None = None,
        filter: str | None = None,
        loggers: list[str] | None = None,
        results_directory: str | None = None,
        collectors: list[str] | None = None,
        no_build: bool | None = None,
        no_restore: bool | None = None,
        blame: bool | None = None,
        verbosity: str | None = None,
    ) -> dict:
        """
        Run unit tests with `dotnet test`.

        Args:
            project: Test project or solution (defaults to the project root)
            configuration: Build configuration (Debug/Release)
            framework: Target framework moniker
            filter: Test filter expression (e.g. "FullyQualifiedName~Api")
            loggers: Test loggers (e.g. "trx", "console;verbosity=detailed")
            results_directory: Directory for test results
            collectors: Data collectors (e.g. "XPlat Code Coverage")
            no_build: Test without building
            no_restore: Skip the implicit restore
            blame: Run in blame mode to isolate crashing tests
            verbosity: quiet, minimal, normal, detailed or diagnostic
        """
        base = await workspace(ctx)
        return await run_alias(
            lambda: dotnet.test(
                resolve_input_path(project, base),
                DotNetCoreTestSettings(
                    working_directory=str(base) if base else None,
                    configuration=configuration,
                    framework=framework,
                    filter=filter,
                    loggers=loggers,
                    results_directory=resolve_input_path(results_directory, base),
                    collectors=collectors,
                    no_build=no_build,
                    no_restore=no_restore,
                    blame=blame,
                    verbosity=to_verbosity(verbosity),
                ),
            ),
            ctx,
        )

    @mcp.tool()
    async def dotnet_clean(
        ctx: Context,
        project: str,
        configuration: str | None = None,
        framework: str | None = None,
        runtime: str | None = None,
        output_directory: str | None = None,
        verbosity: str | None = None,
    ) -> dict:
        """
        Remove build outputs with `dotnet clean`.

        Args:
            project: Path to .csproj/.sln or project directory
            configuration: Build configuration to clean
            framework: Target framework moniker
            runtime: Runtime identifier
            output_directory: Output directory to clean
            verbosity: quiet, minimal, normal, detailed or diagnostic
        """
        base = await workspace(ctx)
        return await run_alias(
            lambda: dotnet.clean(
                resolve_input_path(project, base),
                DotNetCoreCleanSettings(
                    working_directory=str(base) if base else None,
                    configuration=configuration,
                    framework=framework,
                    runtime=runtime,
                    output_directory=resolve_input_path(output_directory, base),
                    verbosity=to_verbosity(verbosity),
                ),
            ),
            ctx,
        )

    @mcp.tool()
    async def dotnet_execute(
        ctx: Context,
        assembly_path: str,
        args: list[str] | None = None,
        framework_version: str | None = None,
    ) -> dict:
        """
        Execute a compiled assembly with `dotnet exec`.

        Args:
            assembly_path: Path to the .dll to execute
            args: Arguments passed to the program
            framework_version: Shared framework version to run on (--fx-version)
        """
        base = await workspace(ctx)
        return await run_alias(
            lambda: dotnet.execute(
                resolve_input_path(assembly_path, base),
                args,
                DotNetCoreExecuteSettings(
                    working_directory=str(base) if base else None,
                    framework_version=framework_version,
                ),
            ),
            ctx,
        )

    # ============== NuGet Tools ==============

    @mcp.tool()
    async def dotnet_nuget_push(
        ctx: Context,
        package: str,
        source: str | None = None,
        api_key: str | None = None,
        skip_duplicate: bool | None = None,
        timeout: int | None = None,
    ) -> dict:
        """
        Push packages to a NuGet feed with `dotnet nuget push`.

        The API key is never echoed back in results or logs.

        Args:
            package: Package path or glob (e.g. "artifacts/*.nupkg")
            source: Feed URL
            api_key: Feed API key
            skip_duplicate: Treat an already-published version as success
            timeout: Push timeout in seconds
        """
        base = await workspace(ctx)
        return await run_alias(
            lambda: dotnet.nuget_push(
                resolve_input_path(package, base),
                DotNetCoreNuGetPushSettings(
                    working_directory=str(base) if base else None,
                    source=source,
                    api_key=api_key,
                    skip_duplicate=skip_duplicate,
                    timeout=timeout,
                ),
            ),
            ctx,
        )

    @mcp.tool()
    async def dotnet_nuget_delete(
        ctx: Context,
        package_name: str,
        package_version: str,
        source: str | None = None,
        api_key: str | None = None,
    ) -> dict:
        """
        Delete (unlist) a package version from a NuGet feed with `dotnet nuget delete`.

        DESTRUCTIVE. Always runs non-interactively; there is no confirmation prompt.

        Args:
            package_name: Package ID
            package_version: Version to delete
            source: Feed URL
            api_key: Feed API key
        """
        base = await workspace(ctx)
        return await run_alias(
            lambda: dotnet.nuget_delete(
                package_name,
                package_version,
                DotNetCoreNuGetDeleteSettings(
                    working_directory=str(base) if base else None,
                    source=source,
                    api_key=api_key,
                    non_interactive=True,
                ),
            ),
            ctx,
        )

    register_resources(mcp, dotnet, get_last_result)

    return mcp
