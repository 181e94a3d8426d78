# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Typed result for the operation pipeline.

Every pipeline stage that can fail returns an ``OperationResult`` instead of
raising or returning ``None``. Failures keep their exception type so callers
and tests can tell a validation problem from an upstream one; only the
envelope formatter reduces a result to text.

Usage::

    from coinmarket.core.response import ok, err

    return ok(payload)
    return err(TransportException("HTTP error! status: 500", status_code=500))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .exceptions import CoinMarketException


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one operation.

    Attributes:
        success: True when the upstream payload was retrieved.
        data:    Decoded JSON payload on success. None on failure.
        error:   Typed failure on failure. None on success.
    """

    success: bool
    data: Any = None
    error: CoinMarketException | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict, mainly for logging and debugging."""
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = self.data
        if self.error is not None:
            d["error"] = self.error.to_dict()
        return d


def ok(data: Any = None) -> OperationResult:
    """Create a successful OperationResult."""
    return OperationResult(success=True, data=data)


def err(error: CoinMarketException) -> OperationResult:
    """Create a failed OperationResult carrying a typed error."""
    return OperationResult(success=False, error=error)
