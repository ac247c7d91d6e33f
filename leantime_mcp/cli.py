"""
Command line handling shared by the stdio and SSE entry points.

Configuration priority:
  1. Command line arguments
  2. Environment variables (system env vars or a .env file)
"""

import argparse
import logging
import os
import re
import sys
from typing import List, Optional

from leantime_mcp.config import API_KEY_ENV, URL_ENV, Config, load_config
from leantime_mcp.errors import ConfigurationError

logger = logging.getLogger(__name__)

EXAMPLES = """
Examples:
  # Using environment variables (from .env file)
  {prog}

  # Using command line arguments
  {prog} --url https://leantime.example.com --api-key your-api-key

  # Mixing both (CLI args take precedence)
  {prog} --url https://leantime.example.com

Configuration priority:
  1. Command line arguments
  2. Environment variables (.env file or system env vars)
"""


def build_parser(prog: str = "leantime-mcp") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="MCP server exposing Leantime tickets and projects as tools.",
        epilog=EXAMPLES.format(prog=prog),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--url", help=f"Leantime server URL (overrides {URL_ENV} env var)")
    parser.add_argument("--api-key", help=f"Leantime API key (overrides {API_KEY_ENV} env var)")
    return parser


def parse_args(argv: Optional[List[str]] = None, prog: str = "leantime-mcp") -> argparse.Namespace:
    """Parse known flags. Unrecognized flags are ignored."""
    args, unknown = build_parser(prog).parse_known_args(argv)
    if unknown:
        logger.debug("Ignoring unrecognized arguments: %s", unknown)
    return args


def configure_logging() -> None:
    # stdout carries the MCP protocol, logs go to stderr
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def resolve_config(args: argparse.Namespace) -> Config:
    """Load configuration or exit with status 1 and a hint."""
    try:
        config = load_config(url=args.url, api_key=args.api_key)
    except ConfigurationError as e:
        print("Error initializing server:", file=sys.stderr)
        print(str(e), file=sys.stderr)
        print(
            f"\nSet {URL_ENV} and {API_KEY_ENV} in your environment or a .env file,",
            file=sys.stderr,
        )
        print("or provide the configuration via command line arguments (--url and --api-key).", file=sys.stderr)
        print("\nRun with --help for more information.", file=sys.stderr)
        sys.exit(1)

    source = "CLI argument" if args.url else "environment variable"
    logger.info(
        "MCP Server configured with URL: %s (from %s)",
        re.sub(r"^https?://", "", config.service_url),
        source,
    )
    return config
