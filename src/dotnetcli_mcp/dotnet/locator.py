"""dotnet executable resolution."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Mapping

from .errors import ToolNotFoundError

logger = logging.getLogger(__name__)

DOTNET_TOOL_NAME = "dotnet"

# Install locations used by the official installers and distro packages
WELL_KNOWN_INSTALL_DIRS: tuple[str, ...] = (
    "/usr/share/dotnet",
    "/usr/local/share/dotnet",
    "/usr/lib/dotnet",
    "/usr/lib64/dotnet",
    "/opt/dotnet",
)


class ToolLocator:
    """Finds the dotnet executable.

    Search order:
    1. Explicit tool path from settings (no fallback if it does not exist)
    2. Default tool path configured on the locator (DOTNET_CLI_PATH)
    3. $DOTNET_ROOT
    4. Well-known install directories (including ~/.dotnet and %ProgramFiles%)
    5. PATH
    """

    def __init__(
        self,
        environment: Mapping[str, str] | None = None,
        default_tool_path: str | None = None,
        install_dirs: tuple[str, ...] = WELL_KNOWN_INSTALL_DIRS,
    ):
        self._environment = dict(environment or {})
        self._default_tool_path = default_tool_path
        self._install_dirs = install_dirs

    @property
    def environment(self) -> Mapping[str, str]:
        """Environment consulted during resolution."""
        return self._environment

    def _executable_names(self, tool_name: str) -> list[str]:
        if os.name == "nt":
            return [f"{tool_name}.exe", tool_name]
        return [tool_name]

    def _candidate_dirs(self) -> list[str]:
        dirs: list[str] = []
        dotnet_root = self._environment.get("DOTNET_ROOT")
        if dotnet_root:
            dirs.append(dotnet_root)
        home = self._environment.get("HOME") or self._environment.get("USERPROFILE")
        if home:
            dirs.append(os.path.join(home, ".dotnet"))
        program_files = self._environment.get("ProgramFiles")
        if program_files:
            dirs.append(os.path.join(program_files, "dotnet"))
        dirs.extend(self._install_dirs)
        return dirs

    @staticmethod
    def _is_executable(path: str) -> bool:
        return os.path.isfile(path) and os.access(path, os.X_OK)

    def resolve(self, tool_name: str = DOTNET_TOOL_NAME, tool_path: str | None = None) -> str:
        """Resolve the executable for tool_name.

        Args:
            tool_name: Logical tool name
            tool_path: Explicit override from settings

        Returns:
            Absolute path to the executable

        Raises:
            ToolNotFoundError: If no candidate exists
        """
        if tool_path:
            path = os.path.abspath(tool_path)
            if self._is_executable(path):
                logger.debug(f"Using explicit tool path: {path}")
                return path
            raise ToolNotFoundError(tool_name, [path])

        searched: list[str] = []

        if self._default_tool_path:
            path = os.path.abspath(self._default_tool_path)
            if self._is_executable(path):
                logger.debug(f"Using configured tool path: {path}")
                return path
            searched.append(path)
            logger.warning(f"Configured dotnet path does not exist: {path}")

        for directory in self._candidate_dirs():
            for name in self._executable_names(tool_name):
                path = os.path.join(directory, name)
                if self._is_executable(path):
                    logger.debug(f"Found {tool_name} in install directory: {path}")
                    return os.path.abspath(path)
                searched.append(path)

        system_path = shutil.which(tool_name, path=self._environment.get("PATH", ""))
        if system_path:
            logger.debug(f"Found {tool_name} on PATH: {system_path}")
            return os.path.abspath(system_path)
        searched.append("PATH")

        raise ToolNotFoundError(tool_name, searched)
