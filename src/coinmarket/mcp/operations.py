# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Operation descriptors for the CoinMarketCap tool surface.

Operation list:
    get-cryptocurrency-listings   /cryptocurrency/listings/latest
    get-cryptocurrency-quotes     /cryptocurrency/quotes/latest   (needs symbol/slug/id)
    get-cryptocurrency-map        /cryptocurrency/map
    get-cryptocurrency-info       /cryptocurrency/info            (needs symbol/slug/id)
    get-global-metrics            /global-metrics/quotes/latest
    get-exchange-listings         /exchange/listings/latest

Each operation is plain data: a schema, static defaults, an endpoint, a
failure message and an optional business rule. Registration happens in
``coinmarket.mcp.dispatcher``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# A rule inspects the merged parameters and returns an error message, or None to pass.
BusinessRule = Callable[[Mapping[str, Any]], str | None]

IDENTIFIER_FIELDS = ("symbol", "slug", "id")
IDENTIFIER_REQUIRED_MESSAGE = "Error: At least one of 'symbol', 'slug', or 'id' is required"


@dataclass(frozen=True)
class ParameterSpec:
    """One declared tool parameter. All parameters are optional strings."""

    name: str
    description: str
    type: str = "string"

    def to_schema(self) -> dict[str, str]:
        return {"type": self.type, "description": self.description}


@dataclass(frozen=True)
class OperationDescriptor:
    """Immutable description of one proxied operation."""

    name: str
    description: str
    endpoint: str
    failure_message: str
    parameters: tuple[ParameterSpec, ...] = ()
    defaults: Mapping[str, str] = field(default_factory=dict)
    rule: BusinessRule | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.parameters)

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema advertised to the MCP host."""
        return {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.parameters},
        }


def require_identifier(params: Mapping[str, Any]) -> str | None:
    """Pass when at least one of symbol, slug or id is present and non-empty."""
    if any(params.get(name) for name in IDENTIFIER_FIELDS):
        return None
    return IDENTIFIER_REQUIRED_MESSAGE


# =============================================================================
# Shared parameter definitions
# =============================================================================

_START = ParameterSpec("start", "Offset (starting with 1)")
_LIMIT = ParameterSpec("limit", "Number of results (default: 100, max: 5000)")
_SORT_DIR = ParameterSpec("sort_dir", "Direction: 'asc' or 'desc'")
_CONVERT = ParameterSpec("convert", "Currency to convert prices to (e.g., 'USD', 'EUR')")
_SYMBOLS = ParameterSpec("symbol", "Comma-separated list of symbols (e.g., 'BTC,ETH')")
_SLUGS = ParameterSpec("slug", "Comma-separated list of slugs (e.g., 'bitcoin,ethereum')")
_IDS = ParameterSpec("id", "Comma-separated list of CoinMarketCap IDs")

_PAGING_DEFAULTS = {"start": "1", "limit": "100"}


# =============================================================================
# Operations
# =============================================================================

CRYPTOCURRENCY_LISTINGS = OperationDescriptor(
    name="get-cryptocurrency-listings",
    description="Get latest cryptocurrency listings with market data",
    endpoint="/cryptocurrency/listings/latest",
    failure_message="Failed to retrieve cryptocurrency listings",
    parameters=(
        _START,
        _LIMIT,
        ParameterSpec("sort", "What to sort by (e.g., 'market_cap', 'volume_24h')"),
        _SORT_DIR,
        ParameterSpec("cryptocurrency_type", "Filter by type (e.g., 'coins', 'tokens')"),
        _CONVERT,
    ),
    defaults={**_PAGING_DEFAULTS, "convert": "USD"},
)

CRYPTOCURRENCY_QUOTES = OperationDescriptor(
    name="get-cryptocurrency-quotes",
    description="Get latest quotes for specific cryptocurrencies",
    endpoint="/cryptocurrency/quotes/latest",
    failure_message="Failed to retrieve cryptocurrency quotes",
    parameters=(_SYMBOLS, _SLUGS, _IDS, _CONVERT),
    defaults={"convert": "USD"},
    rule=require_identifier,
)

CRYPTOCURRENCY_MAP = OperationDescriptor(
    name="get-cryptocurrency-map",
    description="Get mapping of all cryptocurrencies to CoinMarketCap IDs",
    endpoint="/cryptocurrency/map",
    failure_message="Failed to retrieve cryptocurrency map",
    parameters=(
        ParameterSpec("listing_status", "Filter by status (e.g., 'active', 'inactive')"),
        _START,
        _LIMIT,
        ParameterSpec("symbol", "Filter by symbol(s) (comma-separated)"),
    ),
    defaults={"listing_status": "active", **_PAGING_DEFAULTS},
)

CRYPTOCURRENCY_INFO = OperationDescriptor(
    name="get-cryptocurrency-info",
    description="Get metadata for cryptocurrencies",
    endpoint="/cryptocurrency/info",
    failure_message="Failed to retrieve cryptocurrency info",
    parameters=(_SYMBOLS, _SLUGS, _IDS),
    rule=require_identifier,
)

GLOBAL_METRICS = OperationDescriptor(
    name="get-global-metrics",
    description="Get latest global cryptocurrency market metrics",
    endpoint="/global-metrics/quotes/latest",
    failure_message="Failed to retrieve global metrics",
    parameters=(_CONVERT,),
    defaults={"convert": "USD"},
)

EXCHANGE_LISTINGS = OperationDescriptor(
    name="get-exchange-listings",
    description="Get list of all exchanges with market data",
    endpoint="/exchange/listings/latest",
    failure_message="Failed to retrieve exchange listings",
    parameters=(
        _START,
        _LIMIT,
        ParameterSpec("sort", "What to sort by (e.g., 'volume_24h')"),
        _SORT_DIR,
        ParameterSpec("market_type", "Filter by market type (e.g., 'spot', 'derivatives')"),
        _CONVERT,
    ),
    defaults={**_PAGING_DEFAULTS, "convert": "USD"},
)

OPERATIONS: tuple[OperationDescriptor, ...] = (
    CRYPTOCURRENCY_LISTINGS,
    CRYPTOCURRENCY_QUOTES,
    CRYPTOCURRENCY_MAP,
    CRYPTOCURRENCY_INFO,
    GLOBAL_METRICS,
    EXCHANGE_LISTINGS,
)
