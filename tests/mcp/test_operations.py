"""Tests for the operation descriptor table."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from coinmarket.mcp.operations import (
    IDENTIFIER_REQUIRED_MESSAGE,
    OPERATIONS,
    OperationDescriptor,
    ParameterSpec,
    require_identifier,
)

EXPECTED = {
    "get-cryptocurrency-listings": (
        "/cryptocurrency/listings/latest",
        {"start": "1", "limit": "100", "convert": "USD"},
        False,
    ),
    "get-cryptocurrency-quotes": ("/cryptocurrency/quotes/latest", {"convert": "USD"}, True),
    "get-cryptocurrency-map": (
        "/cryptocurrency/map",
        {"listing_status": "active", "start": "1", "limit": "100"},
        False,
    ),
    "get-cryptocurrency-info": ("/cryptocurrency/info", {}, True),
    "get-global-metrics": ("/global-metrics/quotes/latest", {"convert": "USD"}, False),
    "get-exchange-listings": ("/exchange/listings/latest", {"start": "1", "limit": "100", "convert": "USD"}, False),
}


class TestOperationTable:
    def test_names_are_unique_and_complete(self):
        names = [op.name for op in OPERATIONS]
        assert len(names) == len(set(names))
        assert set(names) == set(EXPECTED)

    @pytest.mark.parametrize("operation", OPERATIONS, ids=lambda op: op.name)
    def test_endpoint_defaults_and_rule(self, operation):
        endpoint, defaults, has_rule = EXPECTED[operation.name]
        assert operation.endpoint == endpoint
        assert dict(operation.defaults) == defaults
        assert (operation.rule is not None) is has_rule

    @pytest.mark.parametrize("operation", OPERATIONS, ids=lambda op: op.name)
    def test_defaults_are_declared_parameters(self, operation):
        assert set(operation.defaults) <= set(operation.parameter_names)

    @pytest.mark.parametrize("operation", OPERATIONS, ids=lambda op: op.name)
    def test_failure_message(self, operation):
        assert operation.failure_message.startswith("Failed to retrieve ")

    def test_listing_parameters(self):
        listings = next(op for op in OPERATIONS if op.name == "get-cryptocurrency-listings")
        assert listings.parameter_names == ("start", "limit", "sort", "sort_dir", "cryptocurrency_type", "convert")

    def test_exchange_parameters(self):
        exchanges = next(op for op in OPERATIONS if op.name == "get-exchange-listings")
        assert "market_type" in exchanges.parameter_names


class TestOperationDescriptor:
    def test_defaults_are_read_only(self):
        descriptor = OperationDescriptor(
            name="x", description="d", endpoint="/x", failure_message="f", defaults={"a": "1"}
        )
        assert isinstance(descriptor.defaults, MappingProxyType)
        with pytest.raises(TypeError):
            descriptor.defaults["a"] = "2"  # type: ignore[index]

    def test_defaults_copied_from_source(self):
        source = {"a": "1"}
        descriptor = OperationDescriptor(name="x", description="d", endpoint="/x", failure_message="f", defaults=source)
        source["a"] = "changed"
        assert descriptor.defaults["a"] == "1"

    def test_frozen(self):
        descriptor = OPERATIONS[0]
        with pytest.raises(AttributeError):
            descriptor.name = "other"  # type: ignore[misc]

    def test_input_schema_all_optional_strings(self):
        descriptor = OperationDescriptor(
            name="x",
            description="d",
            endpoint="/x",
            failure_message="f",
            parameters=(ParameterSpec("symbol", "Symbols"), ParameterSpec("convert", "Currency")),
        )
        assert descriptor.input_schema() == {
            "type": "object",
            "properties": {
                "symbol": {"type": "string", "description": "Symbols"},
                "convert": {"type": "string", "description": "Currency"},
            },
        }


class TestRequireIdentifier:
    @pytest.mark.parametrize(
        "params",
        [{"symbol": "BTC"}, {"slug": "bitcoin"}, {"id": "1"}, {"symbol": "", "id": "1027"}],
    )
    def test_passes_with_identifier(self, params):
        assert require_identifier(params) is None

    @pytest.mark.parametrize(
        "params",
        [{}, {"convert": "USD"}, {"symbol": ""}, {"symbol": None, "slug": None, "id": None}],
    )
    def test_fails_without_identifier(self, params):
        assert require_identifier(params) == IDENTIFIER_REQUIRED_MESSAGE

    def test_message_text(self):
        assert IDENTIFIER_REQUIRED_MESSAGE == "Error: At least one of 'symbol', 'slug', or 'id' is required"
