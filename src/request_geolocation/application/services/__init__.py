"""Application services (use cases) for address resolution and enrichment."""

from request_geolocation.application.services.address_resolver import AddressResolver
from request_geolocation.application.services.location_enricher import LocationEnricher
from request_geolocation.application.services.provider_chain import (
    CompositeGeolocationProvider,
    build_provider,
)

__all__ = [
    "AddressResolver",
    "CompositeGeolocationProvider",
    "LocationEnricher",
    "build_provider",
]
