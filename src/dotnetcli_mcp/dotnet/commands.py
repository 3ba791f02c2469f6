"""Command descriptors and settings serialization.

Each dotnet command is described once: its verb, its positional inputs and
a table of recognized options. serialize() turns a settings object into an
ordered ArgumentBuilder:

    [--diagnostics] <verb...> <positionals> <options> [-- <arguments>]

Commands with options_first (exec) place options before the positionals.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from .arguments import ArgumentBuilder
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
    DotNetCoreSettings,
    DotNetCoreTestSettings,
)

ArgumentsInput = str | Sequence[str] | ArgumentBuilder | None


class OptionKind(str, Enum):
    """How an option value is turned into tokens."""

    SWITCH = "switch"  # --flag
    VALUE = "value"  # --flag value
    LIST = "list"  # --flag v1 --flag v2, or --flag v1,v2 with a delimiter
    MAPPING = "mapping"  # --flag:key=value per entry


def format_value(value: Any) -> str:
    """Format a settings value exactly as dotnet expects it."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return str(value)


@dataclass(frozen=True)
class OptionSpec:
    """A recognized option: settings attribute, flag spelling and effect."""

    attribute: str
    flag: str
    kind: OptionKind = OptionKind.VALUE
    delimiter: str | None = None
    attached: bool = False
    secret: bool = False

    def emit(self, value: Any, builder: ArgumentBuilder) -> None:
        """Append the tokens for value; nothing when the option is unset."""
        if value is None:
            return

        if self.kind == OptionKind.SWITCH:
            if value is True:
                builder.append(self.flag)
            return

        if self.kind == OptionKind.MAPPING:
            for key, item in value.items():
                builder.append_quoted(f"{self.flag}:{key}={format_value(item)}")
            return

        if self.kind == OptionKind.LIST:
            items = [format_value(item) for item in value]
            if not items:
                return
            if self.delimiter is None:
                for item in items:
                    self._emit_one(item, builder)
                return
            self._emit_one(self.delimiter.join(items), builder)
            return

        self._emit_one(format_value(value), builder)

    def _emit_one(self, text: str, builder: ArgumentBuilder) -> None:
        if self.attached:
            builder.append_quoted(f"{self.flag}:{text}")
        else:
            builder.append_switch(self.flag, text, secret=self.secret)


@dataclass(frozen=True)
class PositionalSpec:
    """A positional input such as a project or assembly path."""

    name: str
    required: bool = False
    flag: str | None = None
    """Pass the value as `flag value` instead of a bare token."""
    depends_on: str | None = None
    """Another positional that must be present when this one is."""


@dataclass(frozen=True)
class CommandDescriptor:
    """Everything that distinguishes one dotnet command from another."""

    name: str
    verb: tuple[str, ...]
    settings_type: type[DotNetCoreSettings]
    positionals: tuple[PositionalSpec, ...] = ()
    options: tuple[OptionSpec, ...] = ()
    options_first: bool = False
    accepts_arguments: bool = False
    argument_separator: str | None = None
    prompt_guard: str | None = None
    """Settings switch that stops the command from prompting on the console."""

    @property
    def tool_name(self) -> str:
        """Display name used in errors and logs."""
        return f"dotnet {self.name}"

    def validate(self, inputs: Mapping[str, Any]) -> None:
        """Check required positional inputs.

        Raises:
            ArgumentError: If a required input is missing or blank
        """
        for spec in self.positionals:
            value = inputs.get(spec.name)
            present = value is not None and bool(format_value(value).strip())
            if spec.required and not present:
                raise ArgumentError(f"{spec.name} is required for {self.tool_name}")
            if present and spec.depends_on:
                other = inputs.get(spec.depends_on)
                if other is None or not format_value(other).strip():
                    raise ArgumentError(
                        f"{spec.name} requires {spec.depends_on} for {self.tool_name}"
                    )
        unknown = set(inputs) - {spec.name for spec in self.positionals}
        if unknown:
            raise ArgumentError(
                f"Unexpected inputs for {self.tool_name}: {', '.join(sorted(unknown))}"
            )

    def may_prompt(self, settings: DotNetCoreSettings) -> bool:
        """Whether the command can ask for console input with these settings."""
        if self.prompt_guard is None:
            return False
        return getattr(settings, self.prompt_guard, None) is not True


def to_arguments(arguments: ArgumentsInput) -> ArgumentBuilder:
    """Normalize free-form arguments into a builder."""
    if arguments is None:
        return ArgumentBuilder()
    if isinstance(arguments, ArgumentBuilder):
        return arguments.copy()
    if isinstance(arguments, str):
        return ArgumentBuilder.from_string(arguments)
    builder = ArgumentBuilder()
    for token in arguments:
        builder.append_quoted(format_value(token))
    return builder


def serialize(
    descriptor: CommandDescriptor,
    inputs: Mapping[str, Any],
    settings: DotNetCoreSettings,
    arguments: ArgumentsInput = None,
) -> ArgumentBuilder:
    """Serialize a command invocation into ordered arguments.

    Pure: reads settings and inputs, never touches the filesystem or
    environment, and returns a fresh builder on every call.

    Args:
        descriptor: Command to serialize
        inputs: Positional inputs keyed by PositionalSpec.name
        settings: Settings instance of descriptor.settings_type
        arguments: Free-form trailing arguments (run/exec only)

    Returns:
        Argument builder; call tokens() for argv or render() for display
    """
    builder = ArgumentBuilder()
    if settings.diagnostic_output is True:
        builder.append("--diagnostics")
    for token in descriptor.verb:
        builder.append(token)

    positionals = ArgumentBuilder()
    for spec in descriptor.positionals:
        value = inputs.get(spec.name)
        if value is None or not format_value(value).strip():
            continue
        if spec.flag:
            positionals.append(spec.flag)
        positionals.append_quoted(format_value(value))

    options = ArgumentBuilder()
    for option in descriptor.options:
        option.emit(getattr(settings, option.attribute, None), options)

    if descriptor.options_first:
        builder.extend(options).extend(positionals)
    else:
        builder.extend(positionals).extend(options)

    if descriptor.accepts_arguments:
        extra = to_arguments(arguments)
        if extra:
            if descriptor.argument_separator:
                builder.append(descriptor.argument_separator)
            builder.extend(extra)

    if settings.argument_customization is not None:
        customized = settings.argument_customization(builder.copy())
        if not isinstance(customized, ArgumentBuilder):
            raise ArgumentError(
                f"argument_customization for {descriptor.tool_name} must return an "
                f"ArgumentBuilder, got {type(customized).__name__}"
            )
        builder = customized

    return builder


_VERBOSITY: Final = OptionSpec("verbosity", "--verbosity")
_PROPERTIES: Final = OptionSpec("msbuild_properties", "--property", OptionKind.MAPPING)
_SWITCH: Final = OptionKind.SWITCH

RESTORE: Final = CommandDescriptor(
    name="restore",
    verb=("restore",),
    settings_type=DotNetCoreRestoreSettings,
    positionals=(PositionalSpec("root"),),
    options=(
        OptionSpec("sources", "--source", OptionKind.LIST),
        OptionSpec("packages_directory", "--packages"),
        OptionSpec("disable_parallel", "--disable-parallel", _SWITCH),
        OptionSpec("config_file", "--configfile"),
        OptionSpec("no_cache", "--no-cache", _SWITCH),
        OptionSpec("ignore_failed_sources", "--ignore-failed-sources", _SWITCH),
        OptionSpec("no_dependencies", "--no-dependencies", _SWITCH),
        OptionSpec("force", "--force", _SWITCH),
        OptionSpec("runtime", "--runtime"),
        _PROPERTIES,
        _VERBOSITY,
    ),
)

BUILD: Final = CommandDescriptor(
    name="build",
    verb=("build",),
    settings_type=DotNetCoreBuildSettings,
    positionals=(PositionalSpec("project", required=True),),
    options=(
        OptionSpec("framework", "--framework"),
        OptionSpec("runtime", "--runtime"),
        OptionSpec("configuration", "--configuration"),
        OptionSpec("version_suffix", "--version-suffix"),
        OptionSpec("output_directory", "--output"),
        OptionSpec("no_incremental", "--no-incremental", _SWITCH),
        OptionSpec("no_dependencies", "--no-dependencies", _SWITCH),
        OptionSpec("no_restore", "--no-restore", _SWITCH),
        OptionSpec(
            "warnings_as_errors", "-warnaserror", OptionKind.LIST, delimiter=",", attached=True
        ),
        _PROPERTIES,
        _VERBOSITY,
    ),
)

PACK: Final = CommandDescriptor(
    name="pack",
    verb=("pack",),
    settings_type=DotNetCorePackSettings,
    positionals=(PositionalSpec("project", required=True),),
    options=(
        OptionSpec("output_directory", "--output"),
        OptionSpec("configuration", "--configuration"),
        OptionSpec("version_suffix", "--version-suffix"),
        OptionSpec("no_build", "--no-build", _SWITCH),
        OptionSpec("no_restore", "--no-restore", _SWITCH),
        OptionSpec("include_symbols", "--include-symbols", _SWITCH),
        OptionSpec("include_source", "--include-source", _SWITCH),
        OptionSpec("serviceable", "--serviceable", _SWITCH),
        OptionSpec("runtime", "--runtime"),
        _PROPERTIES,
        _VERBOSITY,
    ),
)

RUN: Final = CommandDescriptor(
    name="run",
    verb=("run",),
    settings_type=DotNetCoreRunSettings,
    positionals=(PositionalSpec("project", flag="--project"),),
    options=(
        OptionSpec("framework", "--framework"),
        OptionSpec("configuration", "--configuration"),
        OptionSpec("runtime", "--runtime"),
        OptionSpec("no_restore", "--no-restore", _SWITCH),
        OptionSpec("no_build", "--no-build", _SWITCH),
        OptionSpec("launch_profile", "--launch-profile"),
        _PROPERTIES,
        _VERBOSITY,
    ),
    accepts_arguments=True,
    argument_separator="--",
)

PUBLISH: Final = CommandDescriptor(
    name="publish",
    verb=("publish",),
    settings_type=DotNetCorePublishSettings,
    positionals=(PositionalSpec("project", required=True),),
    options=(
        OptionSpec("framework", "--framework"),
        OptionSpec("runtime", "--runtime"),
        OptionSpec("configuration", "--configuration"),
        OptionSpec("version_suffix", "--version-suffix"),
        OptionSpec("output_directory", "--output"),
        OptionSpec("self_contained", "--self-contained", _SWITCH),
        OptionSpec("no_restore", "--no-restore", _SWITCH),
        OptionSpec("no_build", "--no-build", _SWITCH),
        OptionSpec("no_dependencies", "--no-dependencies", _SWITCH),
        OptionSpec("force", "--force", _SWITCH),
        _PROPERTIES,
        _VERBOSITY,
    ),
)

TEST: Final = CommandDescriptor(
    name="test",
    verb=("test",),
    settings_type=DotNetCoreTestSettings,
    positionals=(PositionalSpec("project"),),
    options=(
        OptionSpec("settings_file", "--settings"),
        OptionSpec("filter", "--filter"),
        OptionSpec("test_adapter_path", "--test-adapter-path"),
        OptionSpec("loggers", "--logger", OptionKind.LIST),
        OptionSpec("framework", "--framework"),
        OptionSpec("configuration", "--configuration"),
        OptionSpec("output_directory", "--output"),
        OptionSpec("results_directory", "--results-directory"),
        OptionSpec("collectors", "--collect", OptionKind.LIST),
        OptionSpec("no_build", "--no-build", _SWITCH),
        OptionSpec("no_restore", "--no-restore", _SWITCH),
        OptionSpec("blame", "--blame", _SWITCH),
        _PROPERTIES,
        _VERBOSITY,
    ),
)

CLEAN: Final = CommandDescriptor(
    name="clean",
    verb=("clean",),
    settings_type=DotNetCoreCleanSettings,
    positionals=(PositionalSpec("project", required=True),),
    options=(
        OptionSpec("framework", "--framework"),
        OptionSpec("runtime", "--runtime"),
        OptionSpec("configuration", "--configuration"),
        OptionSpec("output_directory", "--output"),
        _PROPERTIES,
        _VERBOSITY,
    ),
)

EXECUTE: Final = CommandDescriptor(
    name="exec",
    verb=("exec",),
    settings_type=DotNetCoreExecuteSettings,
    positionals=(PositionalSpec("assembly_path", required=True),),
    options=(
        OptionSpec("framework_version", "--fx-version"),
        OptionSpec("runtime_config", "--runtimeconfig"),
        OptionSpec("deps_file", "--depsfile"),
        OptionSpec("additional_probing_paths", "--additionalprobingpath", OptionKind.LIST),
    ),
    options_first=True,
    accepts_arguments=True,
)

NUGET_PUSH: Final = CommandDescriptor(
    name="nuget push",
    verb=("nuget", "push"),
    settings_type=DotNetCoreNuGetPushSettings,
    positionals=(PositionalSpec("package_name", required=True),),
    options=(
        OptionSpec("source", "--source"),
        OptionSpec("api_key", "--api-key", secret=True),
        OptionSpec("symbol_source", "--symbol-source"),
        OptionSpec("symbol_api_key", "--symbol-api-key", secret=True),
        OptionSpec("timeout", "--timeout"),
        OptionSpec("no_symbols", "--no-symbols", _SWITCH),
        OptionSpec("disable_buffering", "--disable-buffering", _SWITCH),
        OptionSpec("no_service_endpoint", "--no-service-endpoint", _SWITCH),
        OptionSpec("skip_duplicate", "--skip-duplicate", _SWITCH),
        OptionSpec("force_english_output", "--force-english-output", _SWITCH),
    ),
)

NUGET_DELETE: Final = CommandDescriptor(
    name="nuget delete",
    verb=("nuget", "delete"),
    settings_type=DotNetCoreNuGetDeleteSettings,
    positionals=(
        PositionalSpec("package_name"),
        PositionalSpec("package_version", depends_on="package_name"),
    ),
    options=(
        OptionSpec("source", "--source"),
        OptionSpec("api_key", "--api-key", secret=True),
        OptionSpec("non_interactive", "--non-interactive", _SWITCH),
        OptionSpec("no_service_endpoint", "--no-service-endpoint", _SWITCH),
        OptionSpec("force_english_output", "--force-english-output", _SWITCH),
    ),
    prompt_guard="non_interactive",
)

DESCRIPTORS: Final[dict[str, CommandDescriptor]] = {
    descriptor.name: descriptor
    for descriptor in (
        RESTORE,
        BUILD,
        PACK,
        RUN,
        PUBLISH,
        TEST,
        CLEAN,
        EXECUTE,
        NUGET_PUSH,
        NUGET_DELETE,
    )
}
