"""MCP Resources for dotnet CLI state."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .dotnet.errors import ToolNotFoundError

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from .dotnet import DotNetCoreContext


def register_resources(
    server: FastMCP,
    context: DotNetCoreContext,
    get_last_result: Callable[[], dict[str, Any] | None],
) -> None:
    """Register MCP resources."""

    @server.resource("dotnet://last-result", mime_type="application/json")
    async def last_result() -> str:
        """
        Result of the most recent dotnet command.
        Includes: command, commandLine, exitCode, diagnostics, captured output
        """
        return json.dumps(get_last_result(), indent=2)

    @server.resource("dotnet://tool", mime_type="application/json")
    async def tool_info() -> str:
        """
        Resolved dotnet executable used for commands.
        """
        try:
            return json.dumps({"path": context.locator.resolve()}, indent=2)
        except ToolNotFoundError as e:
            return json.dumps({"path": None, "error": str(e), "searched": e.searched}, indent=2)
