#!/usr/bin/env python3
"""
Supabase MCP Server

Exposes Supabase table and RPC access via Model Context Protocol using FastMCP.

Usage:
    # Run with STDIO transport (default, for MCP hosts)
    mcp-supabase

    # Run with HTTP transport
    mcp-supabase --http --port 8001

Environment Variables:
    SUPABASE_URL          - Project URL (e.g. https://xyz.supabase.co)
    SUPABASE_SERVICE_KEY  - Service role key (preferred)
    SUPABASE_ANON_KEY     - Anon key, used when no service key is set
    SUPABASE_TIMEOUT      - Per-request timeout in seconds (default: 30)
    MCP_PORT              - HTTP server port (default: 4001)
    LOG_LEVEL             - Logging level (default: INFO)

Note:
    Configuration is checked at startup but only logged as a warning;
    every tool call resolves it again and fails fast if it is missing.
"""

import argparse
import logging
import os
import signal
import sys

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from .credentials import CredentialSource, describe_credentials, resolve_config
from .errors import ConfigurationError
from .tools import register_tools

# --------------------------------------
# Constants
# --------------------------------------

SERVER_NAME = "mcp-supabase"
DEFAULT_PORT = 4001
DEFAULT_HOST = "0.0.0.0"

logger = logging.getLogger("supabase_mcp")


# --------------------------------------
# Logging Setup
# --------------------------------------

def setup_logger(use_stdio: bool) -> None:
    """Configure logging; stdio mode keeps stdout free for the protocol."""
    if logger.handlers:
        return

    stream = sys.stderr if use_stdio else sys.stdout

    handler = logging.StreamHandler(stream)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] [MCP] %(message)s",
        "%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logger.setLevel(log_level)


# --------------------------------------
# App Factory
# --------------------------------------

def create_app(credentials: CredentialSource | None = None) -> FastMCP:
    """Create and configure MCP application."""
    try:
        config = resolve_config(credentials)
        logger.info("Supabase configured for %s", config.url)
    except ConfigurationError as exc:
        logger.warning("Startup configuration check failed: %s", exc)

    mcp = FastMCP(SERVER_NAME)

    tools = register_tools(mcp, credentials=credentials)
    logger.info("Registered %d tools", len(tools))

    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        return PlainTextResponse("OK", status_code=200)

    @mcp.custom_route("/", methods=["GET"])
    async def index(request: Request) -> PlainTextResponse:
        return PlainTextResponse("Welcome to the Supabase MCP Server")

    return mcp


# --------------------------------------
# Graceful Shutdown
# --------------------------------------

def register_shutdown_handlers() -> None:
    """Handle termination signals gracefully."""

    def shutdown_handler(signum, frame):
        logger.info("Received signal %s. Shutting down gracefully...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)


# --------------------------------------
# Main Entry
# --------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Supabase MCP Server",
        epilog=f"Environment variables:\n{describe_credentials()}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--http",
        action="store_true",
        help="Use HTTP transport instead of STDIO",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("MCP_PORT", DEFAULT_PORT)),
        help="HTTP server port",
    )

    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help="HTTP server host",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    setup_logger(use_stdio=not args.http)
    register_shutdown_handlers()

    try:
        mcp = create_app()

        if args.http:
            logger.info("Starting HTTP server on %s:%d", args.host, args.port)
            mcp.run(
                transport="http",
                host=args.host,
                port=args.port,
            )
        else:
            logger.info("Starting MCP in STDIO mode")
            mcp.run(transport="stdio")
    except Exception as exc:
        logger.exception("Fatal: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
