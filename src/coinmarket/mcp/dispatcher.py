# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Operation registry and dispatch pipeline.

Routes a tool name plus raw arguments through

    validate -> merge defaults -> business rule -> upstream fetch -> envelope

``dispatch`` always returns an envelope. Failures at any stage are captured
as typed ``OperationResult`` errors by ``execute`` and rendered as text by
the formatter; none are raised to the host.

Example:
    registry = OperationRegistry.default(CoinMarketClient(api_key="..."))
    envelope = await registry.dispatch("get-global-metrics", {"convert": "EUR"})
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Any

from mcp.types import TextContent

from coinmarket.core.client import CoinMarketClient
from coinmarket.core.exceptions import (
    CoinMarketException,
    UnknownOperationException,
    ValidationException,
)
from coinmarket.core.logging import correlation_context, tool_logger
from coinmarket.core.response import OperationResult, err

from .formatters import format_result
from .operations import OPERATIONS, OperationDescriptor
from .validation import check_rule, merge_defaults, validate_arguments

logger = logging.getLogger(__name__)


class OperationRegistry:
    """Holds operation descriptors and dispatches calls to them by name."""

    def __init__(self, client: CoinMarketClient, operations: Iterable[OperationDescriptor] = ()):
        self.client = client
        self._operations: dict[str, OperationDescriptor] = {}
        for descriptor in operations:
            self.register(descriptor)

    @classmethod
    def default(cls, client: CoinMarketClient) -> OperationRegistry:
        """Registry holding the full CoinMarketCap operation set."""
        return cls(client, OPERATIONS)

    def register(self, descriptor: OperationDescriptor) -> OperationDescriptor:
        """Add an operation. A later registration under the same name replaces the earlier one."""
        self._operations[descriptor.name] = descriptor
        return descriptor

    def get(self, name: str) -> OperationDescriptor | None:
        return self._operations.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    @property
    def names(self) -> list[str]:
        return list(self._operations.keys())

    @property
    def descriptors(self) -> list[OperationDescriptor]:
        return list(self._operations.values())

    async def execute(
        self,
        name: str,
        arguments: Any,
        timeout: float | None = None,
    ) -> OperationResult:
        """Run the pipeline and return a typed result.

        Args:
            name: Registered operation name
            arguments: Raw tool arguments from the host
            timeout: Deadline for the upstream call; None uses the client default

        Returns:
            OperationResult carrying the payload or a typed CoinMarketException
        """
        descriptor = self._operations.get(name)
        if descriptor is None:
            logger.warning(f"Unknown tool requested: {name}")
            return err(UnknownOperationException(name))

        try:
            validated = validate_arguments(descriptor, arguments)
            params = merge_defaults(descriptor.defaults, validated)
            check_rule(descriptor, params)
            return await self.client.fetch(descriptor.endpoint, params, timeout=timeout)

        except ValidationException as e:
            logger.warning(f"Validation error in tool {name}: {e}")
            return err(e)

        except Exception as e:  # Intentionally broad: top-level handler for unexpected errors
            logger.exception(f"Unexpected error in tool {name}")
            return err(CoinMarketException(f"Internal error: {e}"))

    async def dispatch(
        self,
        name: str,
        arguments: Any,
        timeout: float | None = None,
    ) -> list[TextContent]:
        """Run the pipeline and render the result as a single-block text envelope."""
        descriptor = self._operations.get(name)
        endpoint = descriptor.endpoint if descriptor is not None else None
        with correlation_context():
            tool_logger.log_call(name, arguments, endpoint=endpoint)
            started = time.perf_counter()

            result = await self.execute(name, arguments, timeout=timeout)

            duration_ms = (time.perf_counter() - started) * 1000
            tool_logger.log_result(name, result, duration_ms, endpoint=endpoint)
            return format_result(result, descriptor)
