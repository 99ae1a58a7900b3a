"""12-factor configuration adapter using environment variables."""

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from request_geolocation.domain.addresses import is_valid_ip
from request_geolocation.domain.models import (
    DEFAULT_PROXY_HEADER_NAMES,
    DEFAULT_REMOTE_LOOKUP_TIMEOUT_SECONDS,
    DEFAULT_REMOTE_LOOKUP_URL,
    ResolverConfig,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _split_list(v: object) -> object:
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles.

    Every field can be set through an ``RGEO_``-prefixed environment variable
    (``RGEO_TRUSTED_PROXIES=10.0.0.1,10.0.0.2``) or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="RGEO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")
    log_level: str = Field(default="INFO", description="Root log level")

    # Client address resolution
    use_proxy_headers: bool = Field(
        default=False,
        description="Read forwarding headers sent by trusted proxies (spoofable, opt-in)",
    )
    trusted_proxies: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="IP addresses of proxies whose forwarding headers are believed",
    )
    proxy_header_names: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_PROXY_HEADER_NAMES),
        description="Forwarding headers to inspect, in priority order",
    )
    remote_lookup_url: str = Field(
        default=DEFAULT_REMOTE_LOOKUP_URL,
        description="Plain-text service that echoes the caller's public IP",
    )
    remote_lookup_enabled: bool = Field(
        default=False,
        description="Ask the echo service for the client IP first (useful on localhost)",
    )
    remote_lookup_timeout_seconds: float = Field(
        default=DEFAULT_REMOTE_LOOKUP_TIMEOUT_SECONDS,
        description="Timeout for the remote IP lookup in seconds",
    )

    # Geolocation
    provider_timeout_seconds: float = Field(
        default=5.0, description="Timeout for a geolocation provider query in seconds"
    )
    require_location: bool = Field(
        default=False,
        description="Reject requests with 503 when no location can be determined",
    )

    @field_validator("trusted_proxies", "proxy_header_names", mode="before")
    @classmethod
    def split_comma_separated(cls, v: object) -> object:
        """Accept comma-separated strings for list settings."""
        return _split_list(v)

    @field_validator("trusted_proxies")
    @classmethod
    def validate_trusted_proxies(cls, v: list[str]) -> list[str]:
        """Validate every trusted proxy is an IP literal."""
        invalid = [proxy for proxy in v if not is_valid_ip(proxy)]
        if invalid:
            raise ValueError(f"trusted_proxies must be IP addresses, got: {', '.join(invalid)}")
        return v

    @field_validator("remote_lookup_timeout_seconds", "provider_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeouts are positive."""
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of DEBUG, INFO, WARNING, ERROR, CRITICAL."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{v}'")
        return level

    def to_resolver_config(self) -> ResolverConfig:
        """Build the immutable resolver settings snapshot."""
        return ResolverConfig(
            use_proxy_headers=self.use_proxy_headers,
            trusted_proxies=frozenset(self.trusted_proxies),
            proxy_header_names=tuple(self.proxy_header_names),
            remote_lookup_url=self.remote_lookup_url,
            remote_lookup_enabled=self.remote_lookup_enabled,
            remote_lookup_timeout_seconds=self.remote_lookup_timeout_seconds,
        )
