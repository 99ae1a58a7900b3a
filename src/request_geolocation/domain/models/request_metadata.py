"""Request metadata domain model."""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from request_geolocation.domain.addresses import incoming_header_key, normalize_header_name


class RequestMetadata(BaseModel):
    """Transport peer address and headers of a single request.

    Header keys are stored in normalized form (``HTTP_X_FORWARDED_FOR``), so
    lookups work with any spelling of the header name.
    """

    model_config = ConfigDict(frozen=True)

    peer_address: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_raw_headers(
        cls, peer_address: str | None, headers: Iterable[tuple[str, str]]
    ) -> "RequestMetadata":
        """Build from ``(name, value)`` pairs, joining repeated headers with ``", "``.

        Names containing ``_`` are dropped.
        """
        collected: dict[str, list[str]] = {}
        for name, value in headers:
            key = incoming_header_key(name)
            if key is None:
                continue
            collected.setdefault(key, []).append(value)
        return cls(
            peer_address=peer_address,
            headers={key: ", ".join(values) for key, values in collected.items()},
        )

    def has_header(self, name: str) -> bool:
        return normalize_header_name(name) in self.headers

    def header(self, name: str) -> str | None:
        """Get the full value of a header, or None if it was not sent."""
        return self.headers.get(normalize_header_name(name))
