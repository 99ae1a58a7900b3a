"""Starlette middleware attaching the client address and its geolocation to requests."""

import logging
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import HTTPConnection, Request
from starlette.responses import Response

from request_geolocation.adapters.web.request_metadata import request_metadata_from_request
from request_geolocation.domain.errors import (
    EmptyAddressError,
    InvalidAddressError,
    ProviderError,
)
from request_geolocation.domain.models import GeoRecord
from request_geolocation.domain.ports import ClientAddressResolver, LocationEnricher

logger = logging.getLogger(__name__)

GEO_RECORD_KEY = "geo_record"
CLIENT_IP_KEY = "client_ip"


def get_geo_record(request: HTTPConnection) -> GeoRecord | None:
    """Return the geolocation record attached to a request, if any."""
    return getattr(request.state, GEO_RECORD_KEY, None)


def get_client_ip(request: HTTPConnection) -> str:
    """Return the resolved client IP attached to a request, or an empty string."""
    return getattr(request.state, CLIENT_IP_KEY, "")


class GeolocationMiddleware(BaseHTTPMiddleware):
    """Middleware that resolves the client IP and geolocates it for every request.

    The ``GeoRecord`` is stored on ``request.state`` under ``GEO_RECORD_KEY`` and
    the resolved address under ``CLIENT_IP_KEY`` before the next handler runs.
    """

    def __init__(
        self,
        app: Callable,
        resolver: ClientAddressResolver,
        enricher: LocationEnricher,
        require_location: bool = False,
        exclude_paths: tuple[str, ...] = (),
    ) -> None:
        """Initialize geolocation middleware.

        Args:
            app: The ASGI application to wrap.
            resolver: Resolves the client address of each request.
            enricher: Looks up the resolved address.
            require_location: Answer 503 instead of continuing without a record
                when the address is missing or cannot be located.
            exclude_paths: Request paths passed through without geolocation.
        """
        super().__init__(app)
        self.resolver = resolver
        self.enricher = enricher
        self.require_location = require_location
        self.exclude_paths = frozenset(exclude_paths)

    def _create_unavailable_response(self, reason: str) -> Response:
        return Response(
            content=f"Client location unavailable: {reason}",
            status_code=503,
            media_type="text/plain",
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Attach client IP and location, then continue down the chain."""
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        request_meta = request_metadata_from_request(request)
        client_ip = await self.resolver.resolve(request_meta)
        setattr(request.state, CLIENT_IP_KEY, client_ip)

        try:
            record = await self.enricher.enrich(client_ip)
        except (EmptyAddressError, InvalidAddressError, ProviderError) as e:
            if self.require_location:
                logger.warning(f"Rejecting request to {request.url.path}: {e}")
                return self._create_unavailable_response(str(e))
            logger.warning(f"Continuing without location for {client_ip or 'unknown IP'}: {e}")
        else:
            setattr(request.state, GEO_RECORD_KEY, record)

        response: Response = await call_next(request)
        return response
