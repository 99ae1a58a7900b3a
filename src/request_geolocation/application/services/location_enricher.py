"""Enrichment of a resolved client address with geolocation data."""

import asyncio
import logging
from typing import Any

from request_geolocation.application.services.provider_chain import (
    build_provider,
    provider_name,
)
from request_geolocation.domain.addresses import is_valid_ip
from request_geolocation.domain.errors import (
    ConfigurationError,
    EmptyAddressError,
    InvalidAddressError,
    LocationNotFoundError,
    ProviderError,
)
from request_geolocation.domain.models import GeoRecord, Location

logger = logging.getLogger(__name__)


class LocationEnricher:
    """Looks up a resolved IP with a geolocation provider and builds a ``GeoRecord``."""

    def __init__(self, provider: Any, timeout_seconds: float | None = None) -> None:
        """Initialize the enricher.

        Args:
            provider: A geolocation provider, or an ordered collection of them
                combined into a first-match chain.
            timeout_seconds: Optional limit for a single provider query.

        Raises:
            ConfigurationError: If ``provider`` is not a provider or a non-empty
                collection containing providers, or the timeout is not positive.
        """
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ConfigurationError("timeout_seconds must be positive")
        self._provider = build_provider(provider)
        self._timeout_seconds = timeout_seconds

    @property
    def provider(self) -> Any:
        return self._provider

    async def get_locations(self, ip: str) -> list[Location]:
        """Validate the address and query the provider for it.

        Raises:
            EmptyAddressError: If ``ip`` is empty; the provider is not called.
            InvalidAddressError: If ``ip`` is not an IP literal; the provider is not called.
            ProviderError: If the provider fails or times out.
        """
        if not ip:
            raise EmptyAddressError()
        if not is_valid_ip(ip):
            raise InvalidAddressError(ip)

        name = provider_name(self._provider)
        try:
            return await asyncio.wait_for(self._provider.query(ip), timeout=self._timeout_seconds)
        except TimeoutError as e:
            raise ProviderError(
                f"Provider {name} timed out after {self._timeout_seconds}s for {ip}", name
            ) from e

    async def enrich(self, ip: str) -> GeoRecord:
        """Build the geolocation record for a resolved client address.

        A result without coordinates is a normal outcome (private and anonymized
        ranges) and yields ``longitude=None`` and ``latitude=None``.

        Raises:
            EmptyAddressError: If ``ip`` is empty.
            InvalidAddressError: If ``ip`` is not a valid IP literal.
            LocationNotFoundError: If the provider returned no result.
            ProviderError: If the provider failed.
        """
        locations = await self.get_locations(ip)
        if not locations:
            name = provider_name(self._provider)
            raise LocationNotFoundError(f"No location found for {ip}", name)

        location = locations[0]
        coordinates = location.coordinates
        logger.debug(f"Located {ip} in {location.country_code or 'unknown country'}")

        return GeoRecord(
            ip=ip,
            provider_result=location,
            longitude=coordinates.longitude if coordinates else None,
            latitude=coordinates.latitude if coordinates else None,
            locality=location.locality,
            country=location.country,
            country_code=location.country_code,
            timezone=location.timezone,
        )
