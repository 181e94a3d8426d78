"""Health check utilities for the CoinMarketCap proxy.

Provides startup validation and a CLI health probe. The only hard
requirement is the API credential: without it the server must not start.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from .config import CoreSettings, get_config
from .exceptions import ConfigException

logger = logging.getLogger(__name__)


@dataclass
class HealthStatus:
    """Overall health status of the proxy."""

    healthy: bool = False
    env_vars_present: bool = False
    base_url: str | None = None
    missing_env_vars: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "healthy": self.healthy,
            "env_vars_present": self.env_vars_present,
            "base_url": self.base_url,
            "missing_env_vars": self.missing_env_vars,
            "warnings": self.warnings,
            "error": self.error,
        }


def check_env_vars(settings: CoreSettings) -> tuple[bool, list[str]]:
    """Check that required settings are populated.

    Returns:
        Tuple of (all_required_present, missing_required)
    """
    missing_required = []
    if not settings.api_key.strip():
        missing_required.append("COINMARKET_API_KEY")
    return len(missing_required) == 0, missing_required


def require_credential(settings: CoreSettings) -> str:
    """Return the API key or raise ConfigException when it is missing."""
    present, missing = check_env_vars(settings)
    if not present:
        raise ConfigException(f"Missing {', '.join(missing)} environment variable", missing_vars=missing)
    return settings.api_key


def run_health_check(settings: CoreSettings) -> HealthStatus:
    """Run configuration health checks (no network access)."""
    status = HealthStatus(base_url=settings.base_url)

    status.env_vars_present, status.missing_env_vars = check_env_vars(settings)
    if not status.env_vars_present:
        status.error = f"Missing required environment variables: {', '.join(status.missing_env_vars)}"
        return status

    parsed = urlparse(settings.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        status.error = f"Invalid base URL: {settings.base_url}"
        return status
    if parsed.scheme != "https":
        status.warnings.append(f"Base URL is not HTTPS: {settings.base_url}")

    if settings.timeout_seconds is None:
        status.warnings.append("Request timeout disabled; upstream calls may hang indefinitely")

    status.healthy = True
    return status


def startup_checks(settings: CoreSettings, fail_fast: bool = True) -> HealthStatus:
    """Run startup checks before serving any tool call.

    Args:
        settings: Loaded settings
        fail_fast: If True, exit with error code on failure

    Returns:
        HealthStatus
    """
    logger.info("Running startup health checks...")

    status = run_health_check(settings)

    if status.healthy:
        logger.info("All startup checks passed")
        logger.info(f"  Upstream: {status.base_url}")
        for warning in status.warnings:
            logger.warning(f"  - {warning}")
    else:
        logger.error("Startup checks FAILED")
        logger.error(f"  Error: {status.error}")

        if status.missing_env_vars:
            logger.error(f"  Missing env vars: {', '.join(status.missing_env_vars)}")

        if fail_fast:
            logger.error("Exiting due to failed health checks")
            sys.exit(1)

    return status


def cli_health_check() -> int:
    """CLI entry point for health check.

    Returns:
        Exit code (0 for healthy, 1 for unhealthy)
    """
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    status = run_health_check(get_config())

    print(f"Healthy: {status.healthy}")
    print(f"Environment valid: {status.env_vars_present}")
    print(f"Upstream: {status.base_url}")

    if status.missing_env_vars:
        print(f"Missing env vars: {', '.join(status.missing_env_vars)}")

    if status.error:
        print(f"Error: {status.error}")

    if status.warnings:
        print("Warnings:")
        for warning in status.warnings:
            print(f"  - {warning}")

    return 0 if status.healthy else 1
