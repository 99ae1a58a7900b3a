"""Location domain models returned by geolocation providers."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Location:
    """One location result for an IP address."""

    country: str | None = None
    country_code: str | None = None
    locality: str | None = None
    timezone: str | None = None
    coordinates: Coordinates | None = None
    provider: str = "unknown"  # Name of the provider that produced the result
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)
