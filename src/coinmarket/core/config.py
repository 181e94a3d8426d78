# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Core configuration - centralized config for the coinmarket package.

All environment-based configuration flows through this module. Settings are
read once by the server entry point and then passed explicitly into the
client and dispatcher; library code never calls ``get_config()`` itself.

Usage:
    from coinmarket.core.config import get_config
    config = get_config()

    client = CoinMarketClient.from_settings(config)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://pro-api.coinmarketcap.com/v1"
API_KEY_HEADER = "X-CMC_PRO_API_KEY"


class CoreSettings(BaseSettings):
    """Core configuration settings for the CoinMarketCap proxy.

    Settings can be configured via environment variables with the
    COINMARKET_ prefix, or a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ==========================================================================
    # UPSTREAM API SETTINGS
    # ==========================================================================

    api_key: str = Field(
        default="",
        description="CoinMarketCap Pro API key (required)",
        validation_alias="COINMARKET_API_KEY",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the CoinMarketCap API",
        validation_alias="COINMARKET_BASE_URL",
    )
    request_timeout: float = Field(
        default=30.0,
        ge=0,
        description="Overall deadline per upstream request in seconds (0 disables)",
        validation_alias="COINMARKET_REQUEST_TIMEOUT",
    )

    # ==========================================================================
    # LOGGING SETTINGS
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="COINMARKET_LOG_LEVEL",
    )
    log_format: str = Field(
        default="",
        description="Log format: 'json', 'text', or '' (auto-detect)",
        validation_alias="COINMARKET_LOG_FORMAT",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (optional)",
        validation_alias="COINMARKET_LOG_FILE",
    )

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def timeout_seconds(self) -> float | None:
        """Request deadline, or None when disabled."""
        return self.request_timeout or None


# ==========================================================================
# GLOBAL CONFIG INSTANCE (lazy loaded)
# ==========================================================================

_config: CoreSettings | None = None


def get_config() -> CoreSettings:
    """Get the global configuration instance.

    Returns:
        The singleton CoreSettings instance.
    """
    global _config
    if _config is None:
        _config = CoreSettings()
    return _config


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing."""
    global _config
    _config = None
