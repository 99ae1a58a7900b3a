"""Domain models for client address resolution and geolocation."""

from request_geolocation.domain.models.geo_record import GeoRecord
from request_geolocation.domain.models.location import Coordinates, Location
from request_geolocation.domain.models.request_metadata import RequestMetadata
from request_geolocation.domain.models.resolver_config import (
    DEFAULT_PROXY_HEADER_NAMES,
    DEFAULT_REMOTE_LOOKUP_TIMEOUT_SECONDS,
    DEFAULT_REMOTE_LOOKUP_URL,
    ResolverConfig,
)

__all__ = [
    "DEFAULT_PROXY_HEADER_NAMES",
    "DEFAULT_REMOTE_LOOKUP_TIMEOUT_SECONDS",
    "DEFAULT_REMOTE_LOOKUP_URL",
    "Coordinates",
    "GeoRecord",
    "Location",
    "RequestMetadata",
    "ResolverConfig",
]
