"""Tests for DotNetCoreContext and the free-function aliases."""

from pathlib import Path

import pytest
from conftest import FAKE_DOTNET

from dotnetcli_mcp.dotnet import aliases
from dotnetcli_mcp.dotnet.arguments import ArgumentBuilder
from dotnetcli_mcp.dotnet.context import DotNetCoreContext
from dotnetcli_mcp.dotnet.errors import ArgumentError
from dotnetcli_mcp.dotnet.locator import ToolLocator
from dotnetcli_mcp.dotnet.runner import ProcessRunner
from dotnetcli_mcp.dotnet.settings import (
    DotNetCoreBuildSettings,
    DotNetCoreExecuteSettings,
    DotNetCoreNuGetDeleteSettings,
    DotNetCoreNuGetPushSettings,
    DotNetCorePackSettings,
    DotNetCorePublishSettings,
    DotNetCoreRestoreSettings,
    DotNetCoreRunSettings,
    DotNetCoreTestSettings,
    DotNetCoreVerbosity,
)
from dotnetcli_mcp.dotnet.state import ToolResult


def last_args(runner):
    return runner.calls[-1]["arguments"]


class TestContextConstruction:
    """Tests for default collaborators."""

    def test_defaults(self):
        context = DotNetCoreContext(environment={"PATH": "/bin"})
        assert isinstance(context.runner, ProcessRunner)
        assert isinstance(context.locator, ToolLocator)
        assert context.environment == {"PATH": "/bin"}
        assert context.capture_output is False

    def test_environment_copied(self):
        env = {"PATH": "/bin"}
        context = DotNetCoreContext(environment=env)
        env["PATH"] = "/other"
        assert context.environment["PATH"] == "/bin"

    def test_environment_defaults_to_process(self, monkeypatch):
        monkeypatch.setenv("DOTNETCLI_TEST_MARKER", "1")
        context = DotNetCoreContext()
        assert context.environment["DOTNETCLI_TEST_MARKER"] == "1"


class TestContextCommands:
    """Tests that each command dispatches the right argv."""

    def test_restore_without_root(self, context, runner):
        result = context.restore()
        assert last_args(runner) == ["restore"]
        assert isinstance(result, ToolResult)

    def test_blank_optional_paths_omitted(self, context, runner):
        context.restore("  ")
        context.test("")
        context.run(" ")
        assert [call["arguments"] for call in runner.calls] == [["restore"], ["test"], ["run"]]

    def test_restore_sources(self, context, runner):
        context.restore(
            "./src",
            DotNetCoreRestoreSettings(sources=["https://a", "https://b"], no_cache=True),
        )
        assert last_args(runner) == [
            "restore",
            "./src",
            "--source",
            "https://a",
            "--source",
            "https://b",
            "--no-cache",
        ]

    def test_build(self, context, runner):
        context.build(
            Path("src/App"),
            DotNetCoreBuildSettings(
                configuration="Release", verbosity=DotNetCoreVerbosity.MINIMAL
            ),
        )
        assert last_args(runner) == [
            "build",
            str(Path("src/App")),
            "--configuration",
            "Release",
            "--verbosity",
            "minimal",
        ]
        assert runner.calls[-1]["executable"] == FAKE_DOTNET

    def test_build_requires_project(self, context, runner):
        with pytest.raises(ArgumentError):
            context.build(None)
        with pytest.raises(ArgumentError):
            context.build("   ")
        assert runner.calls == []

    def test_pack(self, context, runner):
        context.pack("App", DotNetCorePackSettings(no_build=True, output_directory="out"))
        assert last_args(runner) == ["pack", "App", "--output", "out", "--no-build"]

    def test_run_with_arguments(self, context, runner):
        context.run(
            "./src/App",
            ["--port", "5000"],
            DotNetCoreRunSettings(framework="net8.0"),
        )
        assert last_args(runner) == [
            "run",
            "--project",
            "./src/App",
            "--framework",
            "net8.0",
            "--",
            "--port",
            "5000",
        ]

    def test_run_without_project(self, context, runner):
        context.run()
        assert last_args(runner) == ["run"]

    def test_publish(self, context, runner):
        context.publish(
            "App", DotNetCorePublishSettings(runtime="linux-x64", self_contained=True)
        )
        assert last_args(runner) == [
            "publish",
            "App",
            "--runtime",
            "linux-x64",
            "--self-contained",
        ]

    def test_test(self, context, runner):
        context.test(
            "Tests.csproj",
            DotNetCoreTestSettings(filter="Category=Unit", loggers=["trx", "console"]),
        )
        assert last_args(runner) == [
            "test",
            "Tests.csproj",
            "--filter",
            "Category=Unit",
            "--logger",
            "trx",
            "--logger",
            "console",
        ]

    def test_clean(self, context, runner):
        context.clean("App")
        assert last_args(runner) == ["clean", "App"]

    def test_execute(self, context, runner):
        context.execute(
            "bin/App.dll",
            ArgumentBuilder().append("--flag"),
            DotNetCoreExecuteSettings(framework_version="8.0.1"),
        )
        assert last_args(runner) == [
            "exec",
            "--fx-version",
            "8.0.1",
            "bin/App.dll",
            "--flag",
        ]

    def test_nuget_push(self, context, runner):
        result = context.nuget_push(
            "artifacts/*.nupkg",
            DotNetCoreNuGetPushSettings(source="https://feed", api_key="k3y"),
        )
        assert last_args(runner) == [
            "nuget",
            "push",
            "artifacts/*.nupkg",
            "--source",
            "https://feed",
            "--api-key",
            "k3y",
        ]
        assert "k3y" not in result.command_line
        assert result.command == "nuget push"

    def test_nuget_delete(self, context, runner):
        context.nuget_delete(
            "Foo", "1.2.3", DotNetCoreNuGetDeleteSettings(non_interactive=True)
        )
        assert last_args(runner) == ["nuget", "delete", "Foo", "1.2.3", "--non-interactive"]

    def test_nuget_delete_version_needs_name(self, context, runner):
        with pytest.raises(ArgumentError):
            context.nuget_delete(None, "1.2.3")
        assert runner.calls == []


class TestAliases:
    """Tests for the free-function aliases."""

    @pytest.mark.parametrize(
        "alias, args",
        [
            (aliases.dotnet_core_restore, ()),
            (aliases.dotnet_core_build, ("App",)),
            (aliases.dotnet_core_pack, ("App",)),
            (aliases.dotnet_core_run, ()),
            (aliases.dotnet_core_publish, ("App",)),
            (aliases.dotnet_core_test, ()),
            (aliases.dotnet_core_clean, ("App",)),
            (aliases.dotnet_core_execute, ("App.dll",)),
            (aliases.dotnet_core_nuget_push, ("App.nupkg",)),
            (aliases.dotnet_core_nuget_delete, ("Foo", "1.0")),
        ],
    )
    def test_missing_context(self, alias, args):
        with pytest.raises(ArgumentError, match="context"):
            alias(None, *args)

    def test_alias_delegates(self, context, runner):
        result = aliases.dotnet_core_build(context, "App")
        assert last_args(runner) == ["build", "App"]
        assert result.success

    def test_execute_alias_arguments(self, context, runner):
        aliases.dotnet_core_execute(context, "App.dll", "a 'b c'")
        assert last_args(runner) == ["exec", "App.dll", "a", "b c"]
