# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Envelope formatting for tool results.

This is the only place a typed ``OperationResult`` is reduced to text. Every
envelope is a single ``TextContent`` block, whether it carries a payload or
a failure message.
"""

from __future__ import annotations

import json
import math
from typing import Any

from mcp.types import TextContent

from coinmarket.core.exceptions import (
    CoinMarketException,
    UnknownOperationException,
    ValidationException,
)
from coinmarket.core.response import OperationResult

from .operations import OperationDescriptor


def text_envelope(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


def _finite(value: Any) -> Any:
    """Replace NaN and infinities with None, which serializes as ``null``."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_finite(v) for v in value]
    return value


def format_payload(payload: Any) -> str:
    """Serialize an upstream payload as 2-space indented JSON.

    Output is ASCII-only, so lone surrogates from ``\\ud800``-style escapes
    survive transport. Non-finite numbers become ``null``.
    """
    try:
        return json.dumps(payload, indent=2, allow_nan=False)
    except ValueError:
        return json.dumps(_finite(payload), indent=2, allow_nan=False)


def failure_text(error: CoinMarketException | None, descriptor: OperationDescriptor | None) -> str:
    """Pick the human-readable text for a failed result.

    Validation errors and unknown operations carry their own message;
    everything else collapses to the operation's fixed failure message.
    """
    if isinstance(error, (ValidationException, UnknownOperationException)):
        return error.message
    if descriptor is not None:
        return descriptor.failure_message
    if error is not None:
        return error.message
    return "Operation failed"


def format_result(result: OperationResult, descriptor: OperationDescriptor | None = None) -> list[TextContent]:
    """Render a result as the single-block envelope returned to the host."""
    if result.success:
        return text_envelope(format_payload(result.data))
    return text_envelope(failure_text(result.error, descriptor))
