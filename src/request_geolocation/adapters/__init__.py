"""Adapters layer - external system integrations."""

from request_geolocation.adapters.config import AppConfig
from request_geolocation.adapters.geo_api import (
    GeoPluginGeolocationProvider,
    IpApiGeolocationProvider,
    LocalNetworkGeolocationProvider,
    default_providers,
)
from request_geolocation.adapters.remote_address_lookup import HttpRemoteAddressLookup

__all__ = [
    "AppConfig",
    "GeoPluginGeolocationProvider",
    "HttpRemoteAddressLookup",
    "IpApiGeolocationProvider",
    "LocalNetworkGeolocationProvider",
    "default_providers",
]
