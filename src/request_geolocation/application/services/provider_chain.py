"""First-match chain of geolocation providers and provider setup validation."""

import logging
from collections.abc import Iterable
from typing import Any

from request_geolocation.domain.errors import ConfigurationError, ProviderError
from request_geolocation.domain.models import Location
from request_geolocation.domain.ports import GeolocationProvider

logger = logging.getLogger(__name__)


def is_provider(candidate: Any) -> bool:
    """Check whether an object implements the provider capability."""
    return callable(getattr(candidate, "query", None))


def provider_name(provider: Any) -> str:
    return str(getattr(provider, "name", None) or type(provider).__name__)


class CompositeGeolocationProvider:
    """Provider that asks its members in order and returns the first non-empty answer.

    Members after the first hit are not queried. A member raising
    ``ProviderError`` is logged and skipped. When no member answers, the last
    failure is re-raised if there was one, otherwise an empty list is returned.
    """

    name = "chain"

    def __init__(self, providers: Iterable[GeolocationProvider]) -> None:
        self._providers = tuple(providers)
        if not self._providers:
            raise ConfigurationError("A provider chain needs at least one provider")

    @property
    def providers(self) -> tuple[GeolocationProvider, ...]:
        return self._providers

    async def query(self, ip: str) -> list[Location]:
        last_error: ProviderError | None = None
        for provider in self._providers:
            try:
                results = await provider.query(ip)
            except ProviderError as e:
                logger.warning(f"Provider {provider_name(provider)} failed for {ip}: {e}")
                last_error = e
                continue

            if results:
                logger.debug(f"Provider {provider_name(provider)} answered for {ip}")
                return list(results)

        if last_error is not None:
            raise last_error
        return []


def build_provider(provider: Any) -> GeolocationProvider:
    """Turn a provider or an ordered collection of providers into one provider.

    Args:
        provider: A single object with a ``query`` method, or a collection of them
            which is combined into a ``CompositeGeolocationProvider``.

    Raises:
        ConfigurationError: If ``provider`` is empty, is neither a provider nor a
            collection, or is a collection without any providers in it.
    """
    if is_provider(provider):
        return provider  # type: ignore[no-any-return]

    if isinstance(provider, (str, bytes, dict)) or not isinstance(provider, Iterable):
        raise ConfigurationError(
            f'"{type(provider).__name__}" is not a valid provider; must be a provider '
            "or a collection of providers"
        )

    members = list(provider)
    if not members:
        raise ConfigurationError('"Empty collection" is not a valid provider')

    providers = [member for member in members if is_provider(member)]
    if not providers:
        raise ConfigurationError("Collection must contain at least one valid provider")

    skipped = len(members) - len(providers)
    if skipped:
        logger.warning(f"Ignoring {skipped} object(s) without a query method in provider chain")

    return CompositeGeolocationProvider(providers)
