"""
Leantime MCP Server - SSE Mode

Serves the same tools over HTTP using the SSE transport. Listens on MCP_PORT
(default 6000).
"""

import contextlib
import logging
import os
from typing import List, Optional

import uvicorn
from mcp.server.sse import SseServerTransport
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route

from leantime_mcp.cli import configure_logging, parse_args, resolve_config
from leantime_mcp.client import LeantimeClient
from leantime_mcp.config import Config
from leantime_mcp.server import SERVER_NAME, create_server

logger = logging.getLogger(__name__)

MCP_HOST = os.getenv("MCP_HOST", "0.0.0.0")
MCP_PORT = int(os.getenv("MCP_PORT", "6000"))


def create_app(config: Config, client: Optional[LeantimeClient] = None) -> Starlette:
    """Starlette app exposing /sse, /messages/ and /health."""
    client = client or LeantimeClient(config)
    server = create_server(client)
    sse = SseServerTransport("/messages/")

    async def handle_sse(request: Request) -> Response:
        """Handle SSE connections."""
        async with sse.connect_sse(request.scope, request.receive, request._send) as streams:
            await server.run(streams[0], streams[1], server.create_initialization_options())
        return Response()

    async def health_check(request: Request) -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse({"status": "healthy", "server": SERVER_NAME, "port": MCP_PORT})

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        await client.aclose()

    return Starlette(
        routes=[
            Route("/health", health_check, methods=["GET"]),
            Route("/sse", handle_sse, methods=["GET"]),
            Mount("/messages/", app=sse.handle_post_message),
        ],
        lifespan=lifespan,
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv, prog="leantime-mcp-sse")
    configure_logging()
    config = resolve_config(args)
    app = create_app(config)
    logger.info("Leantime MCP Server starting on port %s", MCP_PORT)
    logger.info("SSE endpoint: http://localhost:%s/sse", MCP_PORT)
    logger.info("Messages endpoint: http://localhost:%s/messages/", MCP_PORT)
    uvicorn.run(app, host=MCP_HOST, port=MCP_PORT)


if __name__ == "__main__":
    main()
