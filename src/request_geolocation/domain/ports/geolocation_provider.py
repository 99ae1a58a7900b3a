"""Geolocation provider port."""

from typing import Protocol

from request_geolocation.domain.models.location import Location


class GeolocationProvider(Protocol):
    """Port for looking up the location of an IP address."""

    async def query(self, ip: str) -> list[Location]:
        """Return location results for an IP literal, best match first."""
        ...
