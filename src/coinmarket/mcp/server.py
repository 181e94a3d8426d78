# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""CoinMarketCap MCP server.

Exposes the CoinMarketCap operations as MCP tools over stdio.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import Any

import httpx
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from coinmarket.core.client import CoinMarketClient
from coinmarket.core.config import CoreSettings, get_config
from coinmarket.core.exceptions import ConfigException
from coinmarket.core.health import cli_health_check, require_credential, startup_checks
from coinmarket.core.logging import configure_logging

from .dispatcher import OperationRegistry
from .tools import build_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "coinmarketcap"
SERVER_VERSION = "1.0.0"


class CoinMarketMCPServer:
    """MCP front end for an ``OperationRegistry``.

    Handles:
    - list_tools: one tool per registered operation
    - call_tool: routed through ``OperationRegistry.dispatch``

    Input validation by the MCP SDK is disabled so the registry's own
    validator sees raw arguments, including explicit nulls.
    """

    def __init__(self, registry: OperationRegistry):
        self.registry = registry
        self.server = Server(SERVER_NAME, version=SERVER_VERSION)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            return self.get_tools()

        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            return await self.handle_tool_call(name, arguments)

    def get_tools(self) -> list[Tool]:
        return build_tools(self.registry.descriptors)

    async def handle_tool_call(self, name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        return await self.registry.dispatch(name, arguments)

    async def serve(self) -> None:
        """Serve on stdin/stdout until the host closes the stream."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("CoinMarketCap MCP Server running on stdio")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def create_server(
    settings: CoreSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CoinMarketMCPServer:
    """Build a server wired to a client configured from ``settings``."""
    client = CoinMarketClient.from_settings(settings, transport=transport)
    return CoinMarketMCPServer(OperationRegistry.default(client))


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="CoinMarketCap MCP Server")
    parser.add_argument("--health-check", action="store_true", help="Run health check and exit")
    parser.add_argument("--skip-health-check", action="store_true", help="Skip startup health checks")
    return parser.parse_args(argv)


def run(argv: Sequence[str] | None = None) -> None:
    """Run the CoinMarketCap MCP server."""
    args = parse_args(argv)

    if args.health_check:
        sys.exit(cli_health_check())

    settings = get_config()
    configure_logging(settings=settings)

    logger.info("CoinMarketCap MCP server starting...")

    if not args.skip_health_check:
        startup_checks(settings, fail_fast=True)

    # The credential is required even when the other checks are skipped
    try:
        require_credential(settings)
    except ConfigException as e:
        logger.error(f"Fatal configuration error: {e.message}")
        sys.exit(1)

    server = create_server(settings)

    try:
        asyncio.run(server.serve())
    except Exception:
        logger.exception("Fatal error in main()")
        sys.exit(1)


if __name__ == "__main__":
    run()
