"""Location enricher port."""

from typing import Protocol

from request_geolocation.domain.models.geo_record import GeoRecord


class LocationEnricher(Protocol):
    """Port for turning a resolved client IP into a geolocation record."""

    async def enrich(self, ip: str) -> GeoRecord:
        """Build the geolocation record for an IP.

        Raises:
            EmptyAddressError: If ``ip`` is empty.
            InvalidAddressError: If ``ip`` is not a valid IP literal.
            ProviderError: If the provider failed or had no result.
        """
        ...
