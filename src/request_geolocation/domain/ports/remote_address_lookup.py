"""Remote address lookup port."""

from typing import Protocol


class RemoteAddressLookup(Protocol):
    """Port for asking an external echo service which address we are seen as."""

    async def lookup(self, url: str, timeout_seconds: float) -> str | None:
        """Return the public IP reported by the service at ``url``, or None on any failure."""
        ...
