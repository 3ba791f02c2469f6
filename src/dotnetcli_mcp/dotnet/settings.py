"""Settings for each dotnet CLI command.

Every option defaults to None, which means "unset": no flag is emitted and
dotnet applies its own default. None is deliberately distinct from False or "".
Settings are frozen; the core never mutates them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .arguments import ArgumentBuilder


class DotNetCoreVerbosity(str, Enum):
    """MSBuild verbosity levels accepted by --verbosity."""

    QUIET = "quiet"
    MINIMAL = "minimal"
    NORMAL = "normal"
    DETAILED = "detailed"
    DIAGNOSTIC = "diagnostic"


@dataclass(frozen=True)
class DotNetCoreSettings:
    """Options shared by every dotnet command."""

    tool_path: str | None = None
    """Explicit path to the dotnet executable."""

    working_directory: str | None = None
    """Working directory for the child process."""

    environment_variables: Mapping[str, str] | None = None
    """Extra environment variables for the child process."""

    diagnostic_output: bool | None = None
    """Emit the global --diagnostics switch before the verb."""

    argument_customization: Callable[[ArgumentBuilder], ArgumentBuilder] | None = None
    """Hook applied to the serialized arguments as the last step."""


@dataclass(frozen=True)
class DotNetCoreMSBuildSettings(DotNetCoreSettings):
    """Options shared by the commands that drive MSBuild."""

    verbosity: DotNetCoreVerbosity | None = None


@dataclass(frozen=True)
class DotNetCoreRestoreSettings(DotNetCoreMSBuildSettings):
    """Settings for `dotnet restore`."""

    sources: Sequence[str] | None = None
    packages_directory: str | None = None
    disable_parallel: bool | None = None
    config_file: str | None = None
    no_cache: bool | None = None
    ignore_failed_sources: bool | None = None
    no_dependencies: bool | None = None
    force: bool | None = None
    runtime: str | None = None
    msbuild_properties: Mapping[str, str] | None = None


@dataclass(frozen=True)
class DotNetCoreBuildSettings(DotNetCoreMSBuildSettings):
    """Settings for `dotnet build`."""

    framework: str | None = None
    runtime: str | None = None
    configuration: str | None = None
    version_suffix: str | None = None
    output_directory: str | None = None
    no_incremental: bool | None = None
    no_dependencies: bool | None = None
    no_restore: bool | None = None
    warnings_as_errors: Sequence[str] | None = None
    msbuild_properties: Mapping[str, str] | None = None


@dataclass(frozen=True)
class DotNetCorePackSettings(DotNetCoreMSBuildSettings):
    """Settings for `dotnet pack`."""

    output_directory: str | None = None
    configuration: str | None = None
    version_suffix: str | None = None
    no_build: bool | None = None
    no_restore: bool | None = None
    include_symbols: bool | None = None
    include_source: bool | None = None
    serviceable: bool | None = None
    runtime: str | None = None
    msbuild_properties: Mapping[str, str] | None = None


@dataclass(frozen=True)
class DotNetCoreRunSettings(DotNetCoreMSBuildSettings):
    """Settings for `dotnet run`."""

    framework: str | None = None
    configuration: str | None = None
    runtime: str | None = None
    no_restore: bool | None = None
    no_build: bool | None = None
    launch_profile: str | None = None
    msbuild_properties: Mapping[str, str] | None = None


@dataclass(frozen=True)
class DotNetCorePublishSettings(DotNetCoreMSBuildSettings):
    """Settings for `dotnet publish`."""

    framework: str | None = None
    runtime: str | None = None
    configuration: str | None = None
    version_suffix: str | None = None
    output_directory: str | None = None
    self_contained: bool | None = None
    no_restore: bool | None = None
    no_build: bool | None = None
    no_dependencies: bool | None = None
    force: bool | None = None
    msbuild_properties: Mapping[str, str] | None = None


@dataclass(frozen=True)
class DotNetCoreTestSettings(DotNetCoreMSBuildSettings):
    """Settings for `dotnet test`."""

    settings_file: str | None = None
    filter: str | None = None
    test_adapter_path: str | None = None
    loggers: Sequence[str] | None = None
    framework: str | None = None
    configuration: str | None = None
    output_directory: str | None = None
    results_directory: str | None = None
    collectors: Sequence[str] | None = None
    no_build: bool | None = None
    no_restore: bool | None = None
    blame: bool | None = None
    msbuild_properties: Mapping[str, str] | None = None


@dataclass(frozen=True)
class DotNetCoreCleanSettings(DotNetCoreMSBuildSettings):
    """Settings for `dotnet clean`."""

    framework: str | None = None
    runtime: str | None = None
    configuration: str | None = None
    output_directory: str | None = None
    msbuild_properties: Mapping[str, str] | None = None


@dataclass(frozen=True)
class DotNetCoreExecuteSettings(DotNetCoreSettings):
    """Settings for `dotnet exec`."""

    framework_version: str | None = None
    runtime_config: str | None = None
    deps_file: str | None = None
    additional_probing_paths: Sequence[str] | None = None


@dataclass(frozen=True)
class DotNetCoreNuGetPushSettings(DotNetCoreSettings):
    """Settings for `dotnet nuget push`."""

    source: str | None = None
    api_key: str | None = None
    symbol_source: str | None = None
    symbol_api_key: str | None = None
    timeout: int | None = None
    no_symbols: bool | None = None
    disable_buffering: bool | None = None
    no_service_endpoint: bool | None = None
    skip_duplicate: bool | None = None
    force_english_output: bool | None = None


@dataclass(frozen=True)
class DotNetCoreNuGetDeleteSettings(DotNetCoreSettings):
    """Settings for `dotnet nuget delete`."""

    source: str | None = None
    api_key: str | None = None
    non_interactive: bool | None = None
    no_service_endpoint: bool | None = None
    force_english_output: bool | None = None
