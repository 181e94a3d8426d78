# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""CoinMarketCap MCP server package."""

from .dispatcher import OperationRegistry
from .operations import OPERATIONS, OperationDescriptor, ParameterSpec
from .server import CoinMarketMCPServer, create_server, run
from .tools import COINMARKET_TOOLS

__all__ = [
    "COINMARKET_TOOLS",
    "OPERATIONS",
    "CoinMarketMCPServer",
    "OperationDescriptor",
    "OperationRegistry",
    "ParameterSpec",
    "create_server",
    "run",
]
