"""Immutable geolocation record attached to a request."""

from datetime import UTC, datetime
from typing import Any, NoReturn

from pydantic import BaseModel, ConfigDict, Field

from request_geolocation.domain.errors import ImmutableWriteError


def _now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


class GeoRecord(BaseModel):
    """Geolocation data derived for one request.

    The record is write-once: every field is set at construction and any later
    attribute or item assignment or deletion raises ``ImmutableWriteError``,
    leaving the record untouched. Values can be read as attributes or by key
    (``record["country_code"]``).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ip: str
    provider_result: Any = Field(default=None, repr=False)

    longitude: float | None = None
    latitude: float | None = None

    locality: str | None = None
    country: str | None = None
    country_code: str | None = None

    timezone: str | None = None

    checked_at: str = Field(default_factory=_now_iso)

    def _reject_write(self, name: object) -> NoReturn:
        raise ImmutableWriteError(
            f"{type(self).__name__} objects are immutable; cannot modify {name!r}"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        self._reject_write(name)

    def __delattr__(self, name: str) -> None:
        self._reject_write(name)

    def __setitem__(self, key: str, value: Any) -> None:
        self._reject_write(key)

    def __delitem__(self, key: str) -> None:
        self._reject_write(key)

    def __getitem__(self, key: str) -> Any:
        if key not in type(self).model_fields:
            raise KeyError(key)
        return getattr(self, key)

    def __contains__(self, key: object) -> bool:
        return key in type(self).model_fields

    def get(self, key: str, default: Any = None) -> Any:
        """Read a field by name, returning ``default`` for unknown names."""
        return self[key] if key in self else default

    def to_dict(self) -> dict[str, Any]:
        """Serializable view of the record, without the raw provider result."""
        return self.model_dump(exclude={"provider_result"})
