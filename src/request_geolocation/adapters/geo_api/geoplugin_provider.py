"""Geolocation provider for the geoPlugin JSON endpoint."""

from typing import Any

from request_geolocation.adapters.geo_api.http_provider import (
    HttpGeolocationProvider,
    to_float,
    to_text,
)
from request_geolocation.domain.models import Coordinates, Location

GEOPLUGIN_URL = "http://www.geoplugin.net/json.gp"


class GeoPluginGeolocationProvider(HttpGeolocationProvider):
    """Adapter for geoplugin.net."""

    name = "geoplugin"

    def _build_url(self, ip: str) -> tuple[str, dict[str, str] | None]:
        return GEOPLUGIN_URL, {"ip": ip}

    def _parse(self, ip: str, data: dict[str, Any]) -> list[Location]:  # noqa: ARG002
        # geoPlugin reports its own lookup status inside the body
        status = data.get("geoplugin_status")
        if status not in (200, 206, "200", "206"):
            return []

        latitude = to_float(data.get("geoplugin_latitude"))
        longitude = to_float(data.get("geoplugin_longitude"))
        coordinates = (
            Coordinates(latitude=latitude, longitude=longitude)
            if latitude is not None and longitude is not None
            else None
        )
        country_code = to_text(data.get("geoplugin_countryCode"))
        if country_code is None and coordinates is None:
            return []

        return [
            Location(
                country=to_text(data.get("geoplugin_countryName")),
                country_code=country_code,
                locality=to_text(data.get("geoplugin_city")),
                timezone=to_text(data.get("geoplugin_timezone")),
                coordinates=coordinates,
                provider=self.name,
                raw=data,
            )
        ]
