# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Logging setup for the CoinMarketCap proxy.

Every tool call runs in its own correlation scope, so the lines it emits
(call, upstream faults, result) can be grouped. ``ToolCallLogger`` records
the operation, its endpoint and, for failures, the kind of error carried by
the ``OperationResult``.

All output goes to stderr: stdout carries the MCP stdio protocol.
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from .exceptions import TransportException

if TYPE_CHECKING:
    from .config import CoreSettings
    from .response import OperationResult

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Attribute set on records by ToolCallLogger; formatters lift it into the output.
TOOL_CALL_ATTR = "tool_call"


def get_correlation_id() -> str | None:
    return _correlation_id.get()


@contextmanager
def correlation_context(correlation_id: str | None = None) -> Generator[str, None, None]:
    """Scope a correlation ID to one tool call.

    A fresh 12-character hex ID is generated when none is given.
    """
    token = _correlation_id.set(correlation_id or uuid.uuid4().hex[:12])
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with tool call fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if cid := get_correlation_id():
            entry["correlation_id"] = cid
        entry.update(getattr(record, TOOL_CALL_ATTR, None) or {})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text for interactive use, prefixed with the correlation ID."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        cid = get_correlation_id()
        return f"[{cid}] {line}" if cid else line


def _wants_json(settings: CoreSettings | None) -> bool:
    choice = settings.log_format.lower() if settings is not None else ""
    if choice in ("json", "text"):
        return choice == "json"
    # Auto: JSON when stderr is captured by the MCP host, text on a terminal.
    return not sys.stderr.isatty()


def configure_logging(
    level: str | int | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
    settings: CoreSettings | None = None,
) -> None:
    """Install stderr (and optional file) handlers on the root logger.

    Explicit arguments win over ``settings``; ``settings`` wins over the
    built-in defaults (INFO, auto-detected format, no file).
    """
    if level is None:
        level = settings.log_level if settings is not None else "INFO"
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if json_format is None:
        json_format = _wants_json(settings)
    if log_file is None and settings is not None:
        log_file = settings.log_file

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(JSONFormatter() if json_format else TextFormatter())
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())
        root.addHandler(file_handler)

    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def failure_kind(result: OperationResult) -> str | None:
    """Short label for a failed result, e.g. ``TransportException[503]``."""
    if result.success or result.error is None:
        return None
    kind = type(result.error).__name__
    if isinstance(result.error, TransportException) and result.error.status_code is not None:
        kind = f"{kind}[{result.error.status_code}]"
    return kind


class ToolCallLogger:
    """Logs each dispatched tool call and its outcome.

    Arguments are logged with credential-looking keys redacted and long
    values truncated.
    """

    REDACT = ("api_key", "apikey", "x-cmc_pro_api_key", "secret", "token")
    MAX_VALUE_LENGTH = 200

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("coinmarket.tools")

    def log_call(self, tool_name: str, arguments: Any, endpoint: str | None = None) -> None:
        self.logger.debug(
            f"Tool call: {tool_name}",
            extra={TOOL_CALL_ATTR: {"tool": tool_name, "endpoint": endpoint, "arguments": self._sanitize(arguments)}},
        )

    def log_result(
        self,
        tool_name: str,
        result: OperationResult,
        duration_ms: float,
        endpoint: str | None = None,
    ) -> None:
        """Log the outcome; failures go out at INFO with their error kind."""
        kind = failure_kind(result)
        fields: dict[str, Any] = {
            "tool": tool_name,
            "endpoint": endpoint,
            "success": result.success,
            "duration_ms": round(duration_ms, 1),
        }
        if kind is not None:
            fields["error_kind"] = kind
            fields["error"] = result.error.message
        self.logger.log(
            logging.DEBUG if kind is None else logging.INFO,
            f"Tool result: {tool_name} -> {kind or 'ok'} ({duration_ms:.1f}ms)",
            extra={TOOL_CALL_ATTR: fields},
        )

    def _sanitize(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {
                key: "[REDACTED]" if any(r in str(key).lower() for r in self.REDACT) else self._sanitize(item)
                for key, item in value.items()
            }
        if isinstance(value, list):
            return [self._sanitize(item) for item in value]
        if isinstance(value, str) and len(value) > self.MAX_VALUE_LENGTH:
            return value[: self.MAX_VALUE_LENGTH] + "..."
        return value


tool_logger = ToolCallLogger()
