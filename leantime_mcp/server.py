"""Builds the MCP server from the tool table."""

import logging
from typing import Any, Dict, Optional

from mcp.server import Server
from mcp.types import CallToolResult, Tool

from leantime_mcp import __version__
from leantime_mcp.client import LeantimeClient
from leantime_mcp.tools import Tool as LeantimeTool
from leantime_mcp.tools import build_tool_table, dispatch

logger = logging.getLogger(__name__)

SERVER_NAME = "leantime-mcp"


def create_server(client: LeantimeClient, table: Optional[Dict[str, LeantimeTool]] = None) -> Server:
    """Register the whole tool table on a fresh MCP server."""
    if table is None:
        table = build_tool_table()
    definitions = [tool.definition() for tool in table.values()]
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List all available tools."""
        return definitions

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
        """Handle tool calls."""
        logger.debug("call_tool: %s", name)
        return await dispatch(table, client, name, arguments)

    logger.info("Registered %d tools", len(definitions))
    return server
