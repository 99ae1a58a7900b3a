"""Helpers for IP literals and proxy header names."""

import ipaddress

HEADER_PREFIX = "HTTP_"

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def parse_ip(value: str | None) -> IPAddress | None:
    """Parse a strict IPv4 or IPv6 literal, returning None if it is not one.

    Hostnames, partial addresses, surrounding whitespace and IPv6 zone
    identifiers (``fe80::1%eth0``) are rejected.
    """
    if not value or not isinstance(value, str):
        return None
    if value != value.strip() or "%" in value:
        return None
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def is_valid_ip(value: str | None) -> bool:
    """Check that a given string is a valid IPv4 or IPv6 literal."""
    return parse_ip(value) is not None


def normalize_header_name(name: str) -> str:
    """Normalize a header name to the server-variable form ``HTTP_X_FORWARDED_FOR``.

    Idempotent: ``X-Forwarded-For``, ``x-forwarded-for`` and
    ``HTTP_X_FORWARDED_FOR`` all map to the same key.
    """
    normalized = name.strip().upper().replace("-", "_")
    if not normalized.startswith(HEADER_PREFIX):
        normalized = HEADER_PREFIX + normalized
    return normalized


def incoming_header_key(name: str) -> str | None:
    """Map a header name received on the wire to its ``HTTP_`` key, CGI style.

    The prefix is always added, so a client sending ``Http-X-Forwarded-For``
    gets ``HTTP_HTTP_X_FORWARDED_FOR``. Names containing ``_`` return None
    since ``X_Forwarded_For`` would otherwise collide with ``X-Forwarded-For``.
    """
    name = name.strip()
    if not name or "_" in name:
        return None
    return HEADER_PREFIX + name.upper().replace("-", "_")
