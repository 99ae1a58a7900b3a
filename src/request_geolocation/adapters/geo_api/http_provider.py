"""Shared HTTP plumbing for geolocation providers backed by a JSON web API."""

import logging
import time
from typing import TYPE_CHECKING, Any

import aiohttp

from request_geolocation.adapters.api_request_logger import log_api_request, log_api_response
from request_geolocation.domain.errors import ProviderError
from request_geolocation.domain.models import Location

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_TIMEOUT_SECONDS = 5.0


def to_float(value: Any) -> float | None:
    """Convert a coordinate value to float, treating blanks and garbage as missing."""
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def to_text(value: Any) -> str | None:
    """Convert a text value, treating blanks as missing."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class HttpGeolocationProvider:
    """Base class for providers that answer with one JSON document per IP.

    Subclasses set ``name`` and implement ``_build_url`` and ``_parse``.
    """

    name = "http"

    def __init__(
        self,
        session: "ClientSession",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize with a shared aiohttp session and a per-request timeout."""
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def _build_url(self, ip: str) -> tuple[str, dict[str, str] | None]:
        raise NotImplementedError

    def _parse(self, ip: str, data: dict[str, Any]) -> list[Location]:
        raise NotImplementedError

    async def _fetch_json(self, ip: str) -> dict[str, Any]:
        url, params = self._build_url(ip)
        log_api_request(self.name, "GET", url, params)
        started = time.monotonic()
        try:
            async with self._session.get(url, params=params, timeout=self._timeout) as response:
                log_api_response(self.name, response.status, time.monotonic() - started)
                if response.status != 200:
                    body = await response.text()
                    raise ProviderError(
                        f"{self.name} returned status {response.status}: {body[:200]}", self.name
                    )
                # Some providers label JSON as text/html
                data = await response.json(content_type=None)
        except ProviderError:
            raise
        except (aiohttp.ClientError, TimeoutError) as e:
            raise ProviderError(f"{self.name} request failed: {e!r}", self.name) from e
        except ValueError as e:
            raise ProviderError(f"{self.name} returned malformed JSON: {e}", self.name) from e

        if not isinstance(data, dict):
            raise ProviderError(f"{self.name} returned unexpected payload", self.name)
        return data

    async def query(self, ip: str) -> list[Location]:
        """Look up an IP literal, returning an empty list if the provider has no data."""
        data = await self._fetch_json(ip)
        return self._parse(ip, data)
