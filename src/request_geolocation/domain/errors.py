"""Domain errors for client address resolution and geolocation enrichment."""


class GeolocationError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(GeolocationError):
    """Raised at setup time when providers or resolver settings are unusable."""


class EmptyAddressError(GeolocationError):
    """Raised when no client IP address could be resolved for a request."""

    def __init__(self, message: str = "No client IP address could be resolved") -> None:
        super().__init__(message)


class InvalidAddressError(GeolocationError):
    """Raised when a resolved address is not a valid IPv4 or IPv6 literal."""

    def __init__(self, ip: str) -> None:
        self.ip = ip
        super().__init__(f'IP address "{ip}" is not valid')


class ProviderError(GeolocationError):
    """Raised when a geolocation provider fails to answer a query."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.provider = provider
        super().__init__(message)


class LocationNotFoundError(ProviderError):
    """Raised when the provider answered but returned no location for the address."""


class ImmutableWriteError(GeolocationError, TypeError):
    """Raised on any attempt to modify an immutable record."""
