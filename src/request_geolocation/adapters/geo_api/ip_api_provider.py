"""Geolocation provider for the ip-api.com JSON endpoint.

API Documentation: https://ip-api.com/docs/api:json
"""

import logging
from typing import Any

from request_geolocation.adapters.geo_api.http_provider import (
    HttpGeolocationProvider,
    to_float,
    to_text,
)
from request_geolocation.domain.models import Coordinates, Location

logger = logging.getLogger(__name__)

IP_API_URL = "http://ip-api.com/json"
IP_API_FIELDS = "status,message,country,countryCode,city,lat,lon,timezone,query"


class IpApiGeolocationProvider(HttpGeolocationProvider):
    """Adapter for ip-api.com."""

    name = "ip-api"

    def _build_url(self, ip: str) -> tuple[str, dict[str, str] | None]:
        return f"{IP_API_URL}/{ip}", {"fields": IP_API_FIELDS}

    def _parse(self, ip: str, data: dict[str, Any]) -> list[Location]:
        # Private and reserved ranges come back as {"status": "fail", "message": "private range"}
        if data.get("status") != "success":
            logger.debug(f"ip-api has no data for {ip}: {data.get('message', 'unknown reason')}")
            return []

        latitude = to_float(data.get("lat"))
        longitude = to_float(data.get("lon"))
        coordinates = (
            Coordinates(latitude=latitude, longitude=longitude)
            if latitude is not None and longitude is not None
            else None
        )
        return [
            Location(
                country=to_text(data.get("country")),
                country_code=to_text(data.get("countryCode")),
                locality=to_text(data.get("city")),
                timezone=to_text(data.get("timezone")),
                coordinates=coordinates,
                provider=self.name,
                raw=data,
            )
        ]
