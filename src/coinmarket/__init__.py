# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""coinmarket - CoinMarketCap market data as MCP tools.

A pass-through proxy: each tool validates its arguments, fills in defaults,
makes one GET against the CoinMarketCap Pro API and returns the JSON body as
text. Nothing is cached, retried or rate limited.

Entry point: ``coinmarket-mcp`` (stdio MCP server)
"""

__version__ = "1.0.0"
