"""Working directory resolution for MCP tool calls.

dotnet commands run relative to a project root, taken from (in order):
1. MCP roots reported by the client (Context.list_roots())
2. DOTNETCLI_PROJECT_ROOT / MCP_PROJECT_ROOT environment variables
3. The --project path given at startup
4. A .sln/.csproj/.git marker search from the startup CWD (--project-from-cwd)
5. The startup CWD
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

if TYPE_CHECKING:
    from mcp.server.fastmcp import Context

logger = logging.getLogger(__name__)

PROJECT_FILE_PATTERNS: tuple[str, ...] = ("*.csproj", "*.vbproj", "*.fsproj")


@dataclass
class ProjectRootConfig:
    """Startup settings that affect project root resolution."""

    startup_cwd: Path | None = None
    use_project_from_cwd: bool = False
    explicit_project_path: Path | None = None
    env_var_names: tuple[str, ...] = field(
        default_factory=lambda: ("DOTNETCLI_PROJECT_ROOT", "MCP_PROJECT_ROOT")
    )


_config: ProjectRootConfig = ProjectRootConfig()


def configure_project_root(
    *,
    use_project_from_cwd: bool = False,
    explicit_project_path: str | Path | None = None,
    startup_cwd: str | Path | None = None,
) -> None:
    """Configure project root resolution. Called once at server startup."""
    global _config
    _config = ProjectRootConfig(
        use_project_from_cwd=use_project_from_cwd,
        explicit_project_path=Path(explicit_project_path) if explicit_project_path else None,
        startup_cwd=Path(startup_cwd) if startup_cwd else None,
    )
    logger.debug(
        f"Project root configured: use_cwd={use_project_from_cwd}, "
        f"explicit={explicit_project_path}, startup_cwd={startup_cwd}"
    )


def get_config() -> ProjectRootConfig:
    """Get current project root configuration."""
    return _config


def parse_file_uri(uri: str) -> Path | None:
    """Parse a file:// URI into an absolute Path.

    Returns:
        Path, or None for non-file URIs and relative paths
    """
    parsed = urlparse(str(uri))
    if parsed.scheme != "file":
        logger.warning(f"Not a file URI: {uri}")
        return None

    path_str = unquote(parsed.path)

    if sys.platform == "win32":
        # file:///C:/path -> "/C:/path"
        if path_str.startswith("/") and len(path_str) > 2 and path_str[2] == ":":
            path_str = path_str[1:]
        if parsed.netloc:
            path_str = f"\\\\{parsed.netloc}{path_str}"

    path = Path(path_str)
    if not path.is_absolute():
        logger.warning(f"Parsed path is not absolute: {path}")
        return None
    return path


def find_dotnet_project_root(start_dir: Path | None = None, boundary: Path | None = None) -> Path:
    """Walk up from start_dir looking for .NET project markers.

    Markers, by priority: *.sln, then *.csproj/*.vbproj/*.fsproj, then .git.
    The search does not go above boundary when one is given.

    Returns:
        Directory holding the highest-priority marker, or start_dir
    """
    current = (start_dir or Path.cwd()).resolve()
    stop = boundary.resolve() if boundary is not None else None

    def ancestors() -> Iterator[Path]:
        yield current
        if current == stop:
            return
        for parent in current.parents:
            yield parent
            if parent == stop:
                return

    for directory in ancestors():
        if any(directory.glob("*.sln")):
            return directory

    for directory in ancestors():
        if any(any(directory.glob(pattern)) for pattern in PROJECT_FILE_PATTERNS):
            return directory

    for directory in ancestors():
        # .git is a file in worktrees
        if (directory / ".git").exists():
            return directory

    return current


def _existing_dir(value: str | Path | None) -> Path | None:
    if not value:
        return None
    path = Path(value)
    return path if path.is_dir() else None


def get_project_root_sync(environment: Mapping[str, str] | None = None) -> Path | None:
    """Resolve the project root without MCP client roots."""
    config = get_config()
    env = os.environ if environment is None else environment

    for env_var in config.env_var_names:
        value = env.get(env_var)
        path = _existing_dir(value)
        if path:
            logger.info(f"Using project root from {env_var}: {path}")
            return path
        if value:
            logger.warning(f"{env_var}={value} is not a directory")

    path = _existing_dir(config.explicit_project_path)
    if path:
        return path
    if config.explicit_project_path:
        logger.warning(f"Explicit project path not valid: {config.explicit_project_path}")

    if config.use_project_from_cwd and config.startup_cwd:
        return find_dotnet_project_root(config.startup_cwd)

    return config.startup_cwd


async def get_project_root(ctx: Context | None = None) -> Path | None:
    """Resolve the project root, preferring roots reported by the MCP client.

    Args:
        ctx: MCP Context, or None outside a tool call

    Returns:
        Project root, or None if no source yields one
    """
    if ctx is not None:
        try:
            roots = await ctx.session.list_roots()
        except Exception as e:
            # Client may not support roots
            logger.info(f"Could not get roots from client: {e}")
        else:
            if roots.roots:
                uri = str(roots.roots[0].uri)
                path = parse_file_uri(uri)
                if path and path.is_dir():
                    logger.info(f"Using project root from MCP client: {path}")
                    return path
                logger.warning(f"MCP root path invalid or not accessible: {uri}")

    return get_project_root_sync()
