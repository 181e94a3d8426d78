# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Core building blocks: configuration, errors, logging, and the upstream client."""

from .client import CoinMarketClient
from .config import CoreSettings, clear_config_cache, get_config
from .exceptions import (
    CoinMarketException,
    ConfigException,
    TransportException,
    UnknownOperationException,
    ValidationException,
)
from .response import OperationResult, err, ok

__all__ = [
    "CoinMarketClient",
    "CoinMarketException",
    "ConfigException",
    "CoreSettings",
    "OperationResult",
    "TransportException",
    "UnknownOperationException",
    "ValidationException",
    "clear_config_cache",
    "err",
    "get_config",
    "ok",
]
