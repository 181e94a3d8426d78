"""Tests for envelope formatting."""

from __future__ import annotations

import json

from mcp.types import TextContent

from coinmarket.core.exceptions import (
    CoinMarketException,
    TransportException,
    UnknownOperationException,
    ValidationException,
)
from coinmarket.core.response import err, ok
from coinmarket.mcp.formatters import failure_text, format_payload, format_result, text_envelope
from coinmarket.mcp.operations import CRYPTOCURRENCY_LISTINGS


def test_text_envelope_single_block():
    envelope = text_envelope("hi")
    assert envelope == [TextContent(type="text", text="hi")]


class TestFormatPayload:
    def test_two_space_indent(self):
        assert format_payload({"status": "ok"}) == '{\n  "status": "ok"\n}'

    def test_non_ascii_is_escaped(self):
        text = format_payload({"name": "Ethereum Ξ"})
        assert text == '{\n  "name": "Ethereum \\u039e"\n}'
        assert json.loads(text) == {"name": "Ethereum Ξ"}

    def test_lone_surrogate_is_escaped(self):
        text = format_payload({"name": "\ud800"})
        assert text.isascii()
        assert "\\ud800" in text
        text.encode("utf-8")

    def test_non_finite_numbers_become_null(self):
        text = format_payload({"big": float("inf"), "xs": [float("nan"), 1.5, float("-inf")], "ok": 2})
        assert "Infinity" not in text
        assert "NaN" not in text
        assert json.loads(text) == {"big": None, "xs": [None, 1.5, None], "ok": 2}

    def test_key_order_preserved(self):
        text = format_payload({"b": 1, "a": 2})
        assert text.index('"b"') < text.index('"a"')


class TestFailureText:
    def test_transport_uses_operation_message(self):
        text = failure_text(TransportException("HTTP error! status: 500", status_code=500), CRYPTOCURRENCY_LISTINGS)
        assert text == "Failed to retrieve cryptocurrency listings"

    def test_validation_uses_own_message(self):
        text = failure_text(ValidationException("Invalid value for 'limit'", field="limit"), CRYPTOCURRENCY_LISTINGS)
        assert text == "Invalid value for 'limit'"

    def test_unknown_operation(self):
        assert failure_text(UnknownOperationException("nope"), None) == "Unknown tool: nope"

    def test_internal_error_uses_operation_message(self):
        assert failure_text(CoinMarketException("Internal error: x"), CRYPTOCURRENCY_LISTINGS) == (
            "Failed to retrieve cryptocurrency listings"
        )

    def test_no_descriptor_falls_back_to_error_message(self):
        assert failure_text(TransportException("request timed out"), None) == "request timed out"


class TestFormatResult:
    def test_success_and_failure_share_shape(self):
        success = format_result(ok({"status": "ok"}), CRYPTOCURRENCY_LISTINGS)
        failure = format_result(err(TransportException("boom")), CRYPTOCURRENCY_LISTINGS)

        for envelope in (success, failure):
            assert len(envelope) == 1
            assert envelope[0].type == "text"

        assert json.loads(success[0].text) == {"status": "ok"}
        assert failure[0].text == "Failed to retrieve cryptocurrency listings"
