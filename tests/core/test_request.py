"""Tests for coinmarket.core.request - URL and query construction."""

from __future__ import annotations

from coinmarket.core.request import UpstreamRequest, build_query, build_request, build_url


class TestBuildUrl:
    def test_joins_base_and_endpoint(self):
        assert build_url("https://pro-api.coinmarketcap.com/v1", "/cryptocurrency/map") == (
            "https://pro-api.coinmarketcap.com/v1/cryptocurrency/map"
        )

    def test_strips_trailing_slash(self):
        assert build_url("https://cmc.test/v1/", "/exchange/listings/latest") == (
            "https://cmc.test/v1/exchange/listings/latest"
        )


class TestBuildQuery:
    def test_keeps_insertion_order(self):
        assert build_query({"start": "1", "limit": "50", "convert": "USD"}) == [
            ("start", "1"),
            ("limit", "50"),
            ("convert", "USD"),
        ]

    def test_drops_none_values(self):
        assert build_query({"start": "1", "convert": None}) == [("start", "1")]

    def test_keeps_empty_strings(self):
        assert build_query({"symbol": ""}) == [("symbol", "")]

    def test_coerces_non_strings(self):
        assert build_query({"limit": 10, "aux": 1.5, "flag": True, "off": False}) == [
            ("limit", "10"),
            ("aux", "1.5"),
            ("flag", "true"),
            ("off", "false"),
        ]

    def test_empty_map(self):
        assert build_query({}) == []


def test_build_request():
    request = build_request("https://cmc.test/v1", "/cryptocurrency/info", {"symbol": "BTC", "slug": None})
    assert request == UpstreamRequest(
        url="https://cmc.test/v1/cryptocurrency/info",
        params=[("symbol", "BTC")],
    )
