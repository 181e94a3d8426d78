# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Async HTTP client for the CoinMarketCap Pro API.

Issues exactly one GET per call: no retries, no caching, no backoff. Every
outcome is classified into an ``OperationResult``; transport faults are
logged here and never raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from .config import API_KEY_HEADER, DEFAULT_BASE_URL, CoreSettings
from .exceptions import TransportException
from .request import build_request
from .response import OperationResult, err, ok

logger = logging.getLogger(__name__)


class CoinMarketClient:
    """Thin async client for read-only CoinMarketCap endpoints.

    Args:
        api_key: Credential sent in the ``X-CMC_PRO_API_KEY`` header.
        base_url: API root, e.g. ``https://pro-api.coinmarketcap.com/v1``.
        timeout: Default overall deadline per request in seconds; None or 0 disables it.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or None
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: CoreSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> CoinMarketClient:
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        return {
            API_KEY_HEADER: self.api_key,
            "Accept": "application/json",
        }

    def _handle_response(self, resp: httpx.Response, endpoint: str) -> OperationResult:
        """Classify a response: 2xx with a JSON body is the only success."""
        if not resp.is_success:
            logger.error(f"CoinMarketCap API returned HTTP {resp.status_code} for {endpoint}")
            return err(TransportException(f"HTTP error! status: {resp.status_code}", status_code=resp.status_code))

        try:
            return ok(resp.json())
        except ValueError as e:
            logger.error(f"Error decoding CoinMarketCap API response: {e}")
            return err(TransportException(f"Malformed JSON response: {e}", status_code=resp.status_code))

    async def fetch(
        self,
        endpoint: str,
        params: Mapping[str, Any],
        timeout: float | None = None,
    ) -> OperationResult:
        """GET ``endpoint`` with ``params`` as the query string.

        Args:
            endpoint: Path below the base URL, e.g. ``/cryptocurrency/map``.
            params: Merged parameter map; None-valued keys are left out.
            timeout: Deadline for this call, overriding the client default.
                ``0`` disables the deadline, as ``COINMARKET_REQUEST_TIMEOUT=0`` does.

        Returns:
            ``ok(payload)`` on a 2xx JSON response, otherwise ``err(TransportException)``.
        """
        request = build_request(self.base_url, endpoint, params)
        deadline = (timeout if timeout is not None else self.timeout) or None

        try:
            async with asyncio.timeout(deadline):
                async with httpx.AsyncClient(timeout=deadline, transport=self._transport) as client:
                    resp = await client.get(request.url, params=request.params, headers=self._headers())
            return self._handle_response(resp, endpoint)
        except (httpx.TimeoutException, TimeoutError):
            logger.error(f"CoinMarketCap API request to {endpoint} timed out after {deadline}s")
            return err(TransportException("request timed out"))
        except httpx.HTTPError as e:
            logger.error(f"Error making CoinMarketCap API request: {e}")
            return err(TransportException(f"Request failed: {e}"))
