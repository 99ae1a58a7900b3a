"""Geolocation provider adapters."""

from typing import TYPE_CHECKING

from request_geolocation.adapters.geo_api.geoplugin_provider import GeoPluginGeolocationProvider
from request_geolocation.adapters.geo_api.http_provider import (
    DEFAULT_TIMEOUT_SECONDS,
    HttpGeolocationProvider,
)
from request_geolocation.adapters.geo_api.ip_api_provider import IpApiGeolocationProvider
from request_geolocation.adapters.geo_api.local_network_provider import (
    LocalNetworkGeolocationProvider,
)

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from request_geolocation.domain.ports import GeolocationProvider


def default_providers(
    session: "ClientSession", timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
) -> list["GeolocationProvider"]:
    """Return the default provider chain: local network, then ip-api, then geoPlugin."""
    return [
        LocalNetworkGeolocationProvider(),
        IpApiGeolocationProvider(session, timeout_seconds=timeout_seconds),
        GeoPluginGeolocationProvider(session, timeout_seconds=timeout_seconds),
    ]


__all__ = [
    "GeoPluginGeolocationProvider",
    "HttpGeolocationProvider",
    "IpApiGeolocationProvider",
    "LocalNetworkGeolocationProvider",
    "default_providers",
]
