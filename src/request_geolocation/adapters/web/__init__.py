"""Web adapter - Starlette integration."""

from request_geolocation.adapters.web.geolocation_middleware import (
    CLIENT_IP_KEY,
    GEO_RECORD_KEY,
    GeolocationMiddleware,
    get_client_ip,
    get_geo_record,
)
from request_geolocation.adapters.web.request_metadata import request_metadata_from_request

__all__ = [
    "CLIENT_IP_KEY",
    "GEO_RECORD_KEY",
    "GeolocationMiddleware",
    "get_client_ip",
    "get_geo_record",
    "request_metadata_from_request",
]
