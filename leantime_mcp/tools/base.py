"""
Tool definitions and the result envelope.

A tool pairs a pydantic arguments model with an async handler that talks to
Leantime. ``run_tool`` is the failure boundary: whatever happens below it, the
caller receives a ``CallToolResult``.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Type

from mcp.types import CallToolResult, TextContent
from mcp.types import Tool as MCPTool
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from leantime_mcp.client import LeantimeClient
from leantime_mcp.errors import LeantimeError, ValidationError

logger = logging.getLogger(__name__)

Handler = Callable[[LeantimeClient, Any], Awaitable[Any]]


class ToolArguments(BaseModel):
    """Base for tool argument models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        strict=True,
        extra="ignore",
    )

    def to_params(self, **dump_kwargs: Any) -> Dict[str, Any]:
        """Supplied fields keyed by wire name. Unset and null fields are left out."""
        return self.model_dump(by_alias=True, exclude_none=True, **dump_kwargs)


class NoArguments(ToolArguments):
    pass


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    handler: Handler
    error_action: str
    arguments: Type[ToolArguments] = NoArguments
    success_message: Optional[str] = None

    def definition(self) -> MCPTool:
        schema = self.arguments.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.setdefault("properties", {})
        schema.setdefault("required", [])
        return MCPTool(name=self.name, description=self.description, inputSchema=schema)


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def error_result(error: BaseException, fallback: str) -> CallToolResult:
    message = str(error).strip() or fallback
    return text_result(f"Error: {message}", is_error=True)


def format_validation_error(tool_name: str, error: PydanticValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)


async def run_tool(tool: Tool, client: LeantimeClient, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
    """Validate, invoke and wrap a single tool call. Never raises."""
    fallback = f"Unknown error {tool.error_action}"

    try:
        args = tool.arguments.model_validate(arguments or {})
    except PydanticValidationError as e:
        error = ValidationError(format_validation_error(tool.name, e))
        logger.warning("%s", error)
        return error_result(error, fallback)

    try:
        result = await tool.handler(client, args)
    except LeantimeError as e:
        logger.warning("Tool %s failed: %s", tool.name, e)
        return error_result(e, fallback)
    except Exception as e:
        logger.exception("Tool %s raised an unexpected error", tool.name)
        return error_result(e, fallback)

    text = json.dumps(result, indent=2, default=str)
    if tool.success_message:
        text = f"{tool.success_message} Result: {text}"
    return text_result(text)
