# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Upstream request construction.

Turns an endpoint path plus a merged parameter map into the URL and query
pairs sent to the API.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UpstreamRequest:
    """A fully built GET request: absolute URL and ordered query pairs."""

    url: str
    params: list[tuple[str, str]]


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Build query pairs in insertion order, dropping keys whose value is None."""
    return [(key, _query_value(value)) for key, value in params.items() if value is not None]


def build_url(base_url: str, endpoint: str) -> str:
    return f"{base_url.rstrip('/')}{endpoint}"


def build_request(base_url: str, endpoint: str, params: Mapping[str, Any]) -> UpstreamRequest:
    """Build the upstream request for an endpoint and merged parameters."""
    return UpstreamRequest(url=build_url(base_url, endpoint), params=build_query(params))
