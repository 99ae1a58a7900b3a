"""Domain layer - core models, ports and errors."""

from request_geolocation.domain.errors import (
    ConfigurationError,
    EmptyAddressError,
    GeolocationError,
    ImmutableWriteError,
    InvalidAddressError,
    LocationNotFoundError,
    ProviderError,
)
from request_geolocation.domain.models import (
    Coordinates,
    GeoRecord,
    Location,
    RequestMetadata,
    ResolverConfig,
)
from request_geolocation.domain.ports import (
    ClientAddressResolver,
    GeolocationProvider,
    LocationEnricher,
    RemoteAddressLookup,
)

__all__ = [
    "ClientAddressResolver",
    "ConfigurationError",
    "Coordinates",
    "EmptyAddressError",
    "GeoRecord",
    "GeolocationError",
    "GeolocationProvider",
    "ImmutableWriteError",
    "InvalidAddressError",
    "Location",
    "LocationEnricher",
    "LocationNotFoundError",
    "ProviderError",
    "RemoteAddressLookup",
    "RequestMetadata",
    "ResolverConfig",
]
