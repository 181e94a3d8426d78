# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""MCP tool definitions built from the operation descriptors.

Tool list:
    get-cryptocurrency-listings   Latest listings with market data
    get-cryptocurrency-quotes     Latest quotes for given symbols/slugs/ids
    get-cryptocurrency-map        Cryptocurrency to CoinMarketCap ID mapping
    get-cryptocurrency-info       Static metadata for given symbols/slugs/ids
    get-global-metrics            Global market metrics
    get-exchange-listings         Exchanges with market data
"""

from __future__ import annotations

from collections.abc import Iterable

from mcp.types import Tool

from .operations import OPERATIONS, OperationDescriptor


def build_tool(descriptor: OperationDescriptor) -> Tool:
    return Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema(),
    )


def build_tools(descriptors: Iterable[OperationDescriptor]) -> list[Tool]:
    return [build_tool(d) for d in descriptors]


COINMARKET_TOOLS = build_tools(OPERATIONS)
