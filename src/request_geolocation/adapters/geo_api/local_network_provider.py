"""Geolocation provider for addresses that never leave the local network."""

import ipaddress

from request_geolocation.domain.addresses import parse_ip
from request_geolocation.domain.models import Location

LOCALHOST = "localhost"


class LocalNetworkGeolocationProvider:
    """Answers loopback, private, link-local and reserved addresses without any I/O.

    Public web services have no data for these ranges, so the result names
    ``localhost`` as the country and carries no coordinates. Public addresses
    get an empty answer, letting the next provider in a chain handle them.
    """

    name = "local-network"

    async def query(self, ip: str) -> list[Location]:
        address = parse_ip(ip)
        if address is None:
            return []
        if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
            address = address.ipv4_mapped

        if address.is_global or address.is_multicast:
            return []

        return [
            Location(
                country=LOCALHOST,
                country_code=None,
                locality=LOCALHOST,
                timezone=None,
                coordinates=None,
                provider=self.name,
            )
        ]
