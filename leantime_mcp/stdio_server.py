"""
Leantime MCP Server - STDIO Mode

This is the stdio-based server for Claude Desktop and other MCP hosts.
For HTTP/SSE access, use sse_server.py instead.
"""

import asyncio
import logging
import signal
from typing import List, Optional

from mcp.server.stdio import stdio_server

from leantime_mcp.cli import configure_logging, parse_args, resolve_config
from leantime_mcp.client import LeantimeClient
from leantime_mcp.config import Config
from leantime_mcp.server import create_server

logger = logging.getLogger(__name__)


def install_signal_handlers(task: "asyncio.Task") -> None:
    """Cancel the serving task on SIGINT/SIGTERM so the transport closes cleanly."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, task.cancel)
        except NotImplementedError:
            # Windows event loops have no add_signal_handler; KeyboardInterrupt still applies
            logger.debug("Signal handler for %s not supported on this platform", sig)


async def serve(config: Config) -> None:
    install_signal_handlers(asyncio.current_task())
    async with LeantimeClient(config) as client:
        server = create_server(client)
        try:
            async with stdio_server() as (read_stream, write_stream):
                logger.info("MCP Leantime server started and ready to receive requests")
                await server.run(read_stream, write_stream, server.create_initialization_options())
        except asyncio.CancelledError:
            logger.info("Shutdown signal received, closing transport")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging()
    config = resolve_config(args)
    asyncio.run(serve(config))


if __name__ == "__main__":
    main()
