"""Logging of outgoing lookup requests when RGEO_LOG_REQUESTS is enabled."""

import logging
import os
from typing import Any
from urllib.parse import parse_qsl, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

LOG_REQUESTS_ENV = "RGEO_LOG_REQUESTS"

_SENSITIVE_PARAMS = {"key", "apikey", "api_key", "access_key", "token"}
_REDACTED = "***REDACTED***"


def should_log_requests() -> bool:
    """Check if request logging is enabled via the RGEO_LOG_REQUESTS environment variable."""
    return os.getenv(LOG_REQUESTS_ENV, "").lower() == "true"


def _redact(params: dict[str, Any]) -> dict[str, Any]:
    return {k: _REDACTED if k.lower() in _SENSITIVE_PARAMS else v for k, v in params.items()}


def redact_url(url: str, params: dict[str, Any] | None = None) -> str:
    """Build the full request URL with API keys and tokens masked."""
    parts = urlsplit(url)
    query: dict[str, Any] = dict(parse_qsl(parts.query, keep_blank_values=True))
    if params:
        query.update(params)
    if not query:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(_redact(query).items()))
    return urlunsplit(parts._replace(query=param_str))


def log_api_request(
    service: str,
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
) -> None:
    """Log an outgoing lookup request if RGEO_LOG_REQUESTS is enabled.

    Args:
        service: Name of the provider or lookup service.
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        params: Query parameters (optional, sensitive values are redacted).
    """
    if not should_log_requests():
        return

    logger.info(f"API Request [{service}]: {method} {redact_url(url, params)}")


def log_api_response(service: str, status: int, elapsed_seconds: float) -> None:
    """Log the outcome of a lookup request if RGEO_LOG_REQUESTS is enabled."""
    if not should_log_requests():
        return

    logger.info(f"API Response [{service}]: status {status} in {elapsed_seconds * 1000:.0f} ms")
