"""Tests for CLI entry point argument handling."""

import logging

import pytest

from dotnetcli_mcp.__main__ import configure_logging, main, parse_args


class TestParseArgs:
    """Tests for parse_args."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DOTNET_CLI_PATH", raising=False)
        args = parse_args([])
        assert args.project is None
        assert args.project_from_cwd is False
        assert args.dotnet_path is None

    def test_project(self, tmp_path):
        args = parse_args(["--project", str(tmp_path)])
        assert args.project == str(tmp_path)

    def test_project_from_cwd(self):
        assert parse_args(["--project-from-cwd"]).project_from_cwd is True

    def test_dotnet_path_from_env(self, monkeypatch):
        """Test that DOTNET_CLI_PATH is the default for --dotnet-path."""
        monkeypatch.setenv("DOTNET_CLI_PATH", "/opt/dotnet/dotnet")
        assert parse_args([]).dotnet_path == "/opt/dotnet/dotnet"

    def test_dotnet_path_flag_overrides_env(self, monkeypatch):
        monkeypatch.setenv("DOTNET_CLI_PATH", "/opt/dotnet/dotnet")
        args = parse_args(["--dotnet-path", "/usr/local/bin/dotnet"])
        assert args.dotnet_path == "/usr/local/bin/dotnet"


class TestMain:
    """Tests for main startup checks."""

    @pytest.mark.asyncio
    async def test_project_and_project_from_cwd_conflict(self, tmp_path):
        """Test that combining both project flags exits."""
        with pytest.raises(SystemExit) as exc_info:
            await main(["--project", str(tmp_path), "--project-from-cwd"])
        assert exc_info.value.code == 1


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_invalid_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "nonsense")
        root = logging.getLogger()
        saved = root.handlers[:], root.level
        root.handlers = []
        try:
            configure_logging()
            assert root.level == logging.INFO
        finally:
            root.handlers, level = saved
            root.setLevel(level)
