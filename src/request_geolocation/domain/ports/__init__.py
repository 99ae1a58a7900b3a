"""Ports (interfaces) for the ports-and-adapters architecture."""

from request_geolocation.domain.ports.client_address_resolver import ClientAddressResolver
from request_geolocation.domain.ports.geolocation_provider import GeolocationProvider
from request_geolocation.domain.ports.location_enricher import LocationEnricher
from request_geolocation.domain.ports.remote_address_lookup import RemoteAddressLookup

__all__ = [
    "ClientAddressResolver",
    "GeolocationProvider",
    "LocationEnricher",
    "RemoteAddressLookup",
]
