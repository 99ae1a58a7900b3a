"""Remote "what is my IP" lookup over HTTP."""

import logging
import time
from typing import TYPE_CHECKING

import aiohttp

from request_geolocation.adapters.api_request_logger import log_api_request, log_api_response
from request_geolocation.domain.addresses import is_valid_ip
from request_geolocation.domain.models.resolver_config import (
    DEFAULT_REMOTE_LOOKUP_TIMEOUT_SECONDS,
    DEFAULT_REMOTE_LOOKUP_URL,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

# Echo services answer with a bare address; anything longer is not one
MAX_BODY_LENGTH = 64


class HttpRemoteAddressLookup:
    """Fetches the public address of this host from a plain-text echo service.

    Useful when serving from localhost, where the peer address is a loopback
    address that no geolocation provider knows about. URL and timeout are
    supplied with each call from the current resolver settings.
    """

    def __init__(self, session: "ClientSession") -> None:
        self._session = session

    async def lookup(
        self,
        url: str = DEFAULT_REMOTE_LOOKUP_URL,
        timeout_seconds: float = DEFAULT_REMOTE_LOOKUP_TIMEOUT_SECONDS,
    ) -> str | None:
        """Return the address reported by the echo service at ``url``, or None on any failure."""
        timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        log_api_request("remote-ip", "GET", url)
        started = time.monotonic()
        try:
            async with self._session.get(url, timeout=timeout) as response:
                log_api_response("remote-ip", response.status, time.monotonic() - started)
                if response.status != 200:
                    logger.warning(f"Remote IP lookup returned status {response.status}")
                    return None
                body = (await response.text())[:MAX_BODY_LENGTH].strip()
        except (aiohttp.ClientError, TimeoutError, UnicodeDecodeError) as e:
            logger.warning(f"Remote IP lookup at {url} failed: {e!r}")
            return None

        if not is_valid_ip(body):
            logger.warning(f"Remote IP lookup returned an invalid address: {body!r}")
            return None
        return body
