#!/usr/bin/env python3
"""
Honeycomb MCP Server

Exposes the hive navigation engine via Model Context Protocol using FastMCP.

Usage:
    # Run with HTTP transport (default)
    python mcp_server.py

    # Run with custom port
    python mcp_server.py --port 8001

    # Run with STDIO transport (for agents that spawn the server)
    python mcp_server.py --stdio

Environment Variables:
    MCP_PORT         - Server port (default: 4002)
    HONEYCOMB_HOME   - Storage root holding hexes/ and journeys.jsonl
    LOG_LEVEL        - Log level (default: INFO)
"""

import argparse
import logging
import os
import sys

from honeycomb import HoneycombConfig, Hive
from honeycomb.observability import configure_logging

logger = logging.getLogger(__name__)

config = HoneycombConfig()

# STDIO mode needs a clean stdout for JSON-RPC
configure_logging(
    level=config.log_level,
    format=config.log_format,
    stream=sys.stderr if "--stdio" in sys.argv else sys.stdout,
)

# Suppress FastMCP banner in STDIO mode
if "--stdio" in sys.argv:
    import rich.console

    _original_console_init = rich.console.Console.__init__

    def _patched_console_init(self, *args, **kwargs):
        kwargs["file"] = sys.stderr  # Force all rich output to stderr
        _original_console_init(self, *args, **kwargs)

    rich.console.Console.__init__ = _patched_console_init

from fastmcp import FastMCP  # noqa: E402
from starlette.requests import Request  # noqa: E402
from starlette.responses import PlainTextResponse  # noqa: E402

from honeycomb_tools.tools import register_all_tools  # noqa: E402

hive = Hive.from_config(config)

mcp = FastMCP("hive")

tools = register_all_tools(mcp, hive=hive)
logger.info(f"Registered {len(tools)} tools over {config.storage_path}: {tools}")


@mcp.custom_route("/health", methods=["GET"])
async def health_check(request: Request) -> PlainTextResponse:
    """Health check endpoint for container orchestration."""
    return PlainTextResponse("OK")


@mcp.custom_route("/", methods=["GET"])
async def index(request: Request) -> PlainTextResponse:
    """Landing page for browser visits."""
    return PlainTextResponse("Welcome to the Honeycomb MCP Server")


def main() -> None:
    """Entry point for the MCP server."""
    parser = argparse.ArgumentParser(description="Honeycomb MCP Server")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("MCP_PORT", "4002")),
        help="HTTP server port (default: 4002)",
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="HTTP server host (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Use STDIO transport instead of HTTP",
    )
    args = parser.parse_args()

    if args.stdio:
        mcp.run(transport="stdio")
    else:
        logger.info(f"Starting HTTP server on {args.host}:{args.port}")
        mcp.run(transport="http", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
