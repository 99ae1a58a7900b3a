"""Resolver configuration domain model."""

from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field, field_validator

from request_geolocation.domain.addresses import (
    IPAddress,
    normalize_header_name,
    parse_ip,
)

DEFAULT_PROXY_HEADER_NAMES: tuple[str, ...] = (
    "Forwarded",
    "Forwarded-For",
    "X-Forwarded",
    "X-Forwarded-For",
    "X-Cluster-Client-Ip",
    "Client-Ip",
)

DEFAULT_REMOTE_LOOKUP_URL = "https://api.ipify.org/?format=text"
DEFAULT_REMOTE_LOOKUP_TIMEOUT_SECONDS = 3.0


class ResolverConfig(BaseModel):
    """Settings that control how the client address of a request is resolved.

    Instances are frozen. To change settings at runtime build a new instance
    and hand it to the resolver as a whole.
    """

    model_config = ConfigDict(frozen=True)

    # Proxy headers are easily spoofed, so they are only consulted on opt-in
    use_proxy_headers: bool = False
    trusted_proxies: frozenset[str] = frozenset()
    proxy_header_names: tuple[str, ...] = Field(
        default=tuple(normalize_header_name(name) for name in DEFAULT_PROXY_HEADER_NAMES)
    )
    remote_lookup_url: str = DEFAULT_REMOTE_LOOKUP_URL
    remote_lookup_enabled: bool = False
    remote_lookup_timeout_seconds: float = Field(
        default=DEFAULT_REMOTE_LOOKUP_TIMEOUT_SECONDS, gt=0
    )

    @field_validator("trusted_proxies", mode="before")
    @classmethod
    def strip_trusted_proxies(cls, v: object) -> object:
        """Trim whitespace and drop blank entries from the trusted proxy list."""
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple, set, frozenset)):
            return frozenset(str(p).strip() for p in v if str(p).strip())
        return v

    @field_validator("proxy_header_names", mode="before")
    @classmethod
    def normalize_proxy_header_names(cls, v: object) -> object:
        """Normalize header names; an empty list falls back to the defaults."""
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            names = [normalize_header_name(name) for name in v if name and name.strip()]
            if not names:
                names = [normalize_header_name(name) for name in DEFAULT_PROXY_HEADER_NAMES]
            # Keep priority order, drop duplicates
            return tuple(dict.fromkeys(names))
        return v

    def is_trusted_proxy(self, address: str) -> bool:
        """Check whether an address is one of the trusted proxies.

        Addresses are compared by value, so ``::1`` matches ``0:0::1``.
        Entries that are not IP literals only match by exact string.
        """
        if address in self.trusted_proxies:
            return True
        parsed = parse_ip(address)
        if parsed is None:
            return False
        return parsed in self.trusted_addresses

    @cached_property
    def trusted_addresses(self) -> frozenset[IPAddress]:
        """Trusted proxies parsed to address objects."""
        addresses = {parse_ip(proxy) for proxy in self.trusted_proxies}
        addresses.discard(None)
        return frozenset(addresses)
