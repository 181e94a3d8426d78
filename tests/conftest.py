"""Global test fixtures for the coinmarket test suite."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from coinmarket.core.client import CoinMarketClient
from coinmarket.core.config import CoreSettings, clear_config_cache
from coinmarket.mcp.dispatcher import OperationRegistry

TEST_API_KEY = "test-cmc-key"
TEST_BASE_URL = "https://cmc.test/v1"


# ============================================================================
# Fake upstream
# ============================================================================


class FakeUpstream:
    """Records every request and answers with a configurable response.

    ``transport`` plugs into ``httpx.AsyncClient`` via ``CoinMarketClient``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._handler: Callable[[httpx.Request], Any] = lambda request: httpx.Response(200, json={"status": "ok"})
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        return self._handler(request)

    def respond(self, status_code: int = 200, json_body: Any = None, content: bytes | None = None) -> None:
        if content is None:
            content = json.dumps(json_body if json_body is not None else {}).encode()
        self._handler = lambda request: httpx.Response(
            status_code, content=content, headers={"content-type": "application/json"}
        )

    def fail_with(self, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        def _raise(request: httpx.Request) -> Any:
            raise exc_factory(request)

        self._handler = _raise

    def handle_with(self, handler: Callable[[httpx.Request], Any]) -> None:
        self._handler = handler

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no upstream request was made"
        return self.requests[-1]

    def last_query(self) -> dict[str, str]:
        return dict(self.last_request.url.params)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(upstream: FakeUpstream) -> CoinMarketClient:
    return CoinMarketClient(
        api_key=TEST_API_KEY,
        base_url=TEST_BASE_URL,
        timeout=5.0,
        transport=upstream.transport,
    )


@pytest.fixture
def registry(client: CoinMarketClient) -> OperationRegistry:
    return OperationRegistry.default(client)


# ============================================================================
# Environment / settings
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all COINMARKET_ environment variables."""
    for key in list(os.environ.keys()):
        if key.startswith("COINMARKET_"):
            monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def settings(clean_env) -> CoreSettings:
    return CoreSettings(api_key=TEST_API_KEY, base_url=TEST_BASE_URL, request_timeout=5.0)
