"""Mapping of Starlette requests to transport-independent request metadata."""

from typing import TYPE_CHECKING

from request_geolocation.domain.models import RequestMetadata

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection


def request_metadata_from_request(request: "HTTPConnection") -> RequestMetadata:
    """Extract the peer address and all headers of a request.

    Repeated headers are joined into one comma-separated value.
    """
    peer = request.client.host if request.client and request.client.host else None
    return RequestMetadata.from_raw_headers(peer, request.headers.items())
