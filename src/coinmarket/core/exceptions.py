# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Custom exception hierarchy for the CoinMarketCap proxy.

Every failure a tool call can hit maps onto one of these types. The
dispatcher keeps them as typed values inside an ``OperationResult`` and
only the envelope formatter turns them into text.
"""

from __future__ import annotations

from typing import Any


class CoinMarketException(Exception):  # noqa: N818
    """Base exception for all proxy errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CoinMarketException):
    """Exception for argument validation errors.

    Raised when:
    - A declared parameter holds a non-string value
    - An operation's business rule is not met (e.g. no identifier given)
    - The argument payload is not a mapping
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class TransportException(CoinMarketException):
    """Exception for upstream HTTP failures.

    Raised when:
    - The API answers with a non-2xx status
    - The connection fails or times out
    - The response body is not valid JSON
    """

    def __init__(self, message: str, status_code: int | None = None):
        details = {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.status_code = status_code


class UnknownOperationException(CoinMarketException):
    """Exception for tool names with no registered operation."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", {"name": name})
        self.name = name


class ConfigException(CoinMarketException):
    """Exception for configuration errors.

    Raised when:
    - Required environment variables are missing
    - Configuration values are invalid
    """

    def __init__(self, message: str, missing_vars: list[str] | None = None):
        details = {}
        if missing_vars:
            details["missing_vars"] = missing_vars
        super().__init__(message, details)
        self.missing_vars = missing_vars or []
