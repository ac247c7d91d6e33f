"""Tool registry: one table of every tool exposed over MCP."""

from typing import Any, Dict, Iterable, Optional

from mcp.types import CallToolResult

from leantime_mcp.client import LeantimeClient
from leantime_mcp.tools.base import Tool, run_tool, text_result
from leantime_mcp.tools.projects import PROJECT_TOOLS
from leantime_mcp.tools.tickets import TICKET_TOOLS


def build_tool_table(*groups: Iterable[Tool]) -> Dict[str, Tool]:
    """Index tools by name. Defaults to the ticket and project tools."""
    if not groups:
        groups = (TICKET_TOOLS, PROJECT_TOOLS)
    table: Dict[str, Tool] = {}
    for group in groups:
        for tool in group:
            if tool.name in table:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            table[tool.name] = tool
    return table


async def dispatch(
    table: Dict[str, Tool], client: LeantimeClient, name: str, arguments: Optional[Dict[str, Any]]
) -> CallToolResult:
    tool = table.get(name)
    if tool is None:
        return text_result(f"Error: Unknown tool: {name}", is_error=True)
    return await run_tool(tool, client, arguments)


__all__ = ["Tool", "build_tool_table", "dispatch", "run_tool", "PROJECT_TOOLS", "TICKET_TOOLS"]
