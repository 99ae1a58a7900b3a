"""Client address resolver port."""

from typing import Protocol

from request_geolocation.domain.models.request_metadata import RequestMetadata


class ClientAddressResolver(Protocol):
    """Port for working out the originating IP address of a request."""

    async def resolve(
        self, request_meta: RequestMetadata, remote_lookup: bool | None = None
    ) -> str:
        """Return the client IP of a request, or an empty string if none was found."""
        ...
