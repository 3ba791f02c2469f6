"""Pytest fixtures for dotnetcli-mcp tests."""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from dotnetcli_mcp.dotnet.context import DotNetCoreContext  # noqa: E402
from dotnetcli_mcp.dotnet.state import ProcessResult  # noqa: E402

FAKE_DOTNET = "/opt/fake/dotnet"


class RecordingRunner:
    """Process runner stub that records invocations instead of spawning."""

    def __init__(self, exit_code=0, stdout=None, stderr=None):
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.calls = []

    def run(
        self,
        executable,
        arguments,
        working_directory=None,
        environment=None,
        capture_output=False,
    ):
        self.calls.append(
            {
                "executable": executable,
                "arguments": list(arguments),
                "working_directory": working_directory,
                "environment": environment,
                "capture_output": capture_output,
            }
        )
        return ProcessResult(
            exit_code=self.exit_code,
            stdout=self.stdout if capture_output else None,
            stderr=self.stderr if capture_output else None,
            duration_ms=12.5,
        )


class StaticLocator:
    """Tool locator stub resolving every tool to a fixed path."""

    def __init__(self, path=FAKE_DOTNET):
        self.path = path
        self.calls = []

    def resolve(self, tool_name="dotnet", tool_path=None):
        self.calls.append((tool_name, tool_path))
        return tool_path or self.path


@pytest.fixture
def runner():
    """Recording process runner returning exit code 0."""
    return RecordingRunner()


@pytest.fixture
def locator():
    """Locator that always resolves to FAKE_DOTNET."""
    return StaticLocator()


@pytest.fixture
def context(runner, locator):
    """Build context wired to the recording runner."""
    return DotNetCoreContext(
        runner=runner,
        locator=locator,
        environment={"PATH": "/usr/bin"},
    )


@pytest.fixture
def sample_build_output():
    """Sample dotnet build console output."""
    return (
        "  Determining projects to restore...\n"
        "  All projects are up-to-date for restore.\n"
        "/src/App/Program.cs(12,17): warning CS0168: The variable 'ex' is declared "
        "but never used [/src/App/App.csproj]\n"
        "/src/App/Service.cs(40,9): error CS0103: The name 'foo' does not exist "
        "in the current context [/src/App/App.csproj]\n"
        "Build FAILED.\n"
    )
