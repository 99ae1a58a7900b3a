"""Resolution of the originating client IP address of a request."""

import logging
from typing import TYPE_CHECKING

from request_geolocation.domain.addresses import is_valid_ip, normalize_header_name
from request_geolocation.domain.models import RequestMetadata, ResolverConfig

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from request_geolocation.domain.ports import RemoteAddressLookup

FORWARDED_HEADER = normalize_header_name("Forwarded")


def _strip_port(node: str) -> str:
    """Remove brackets and port from a Forwarded node (``"[2001:db8::1]:443"``)."""
    if node.startswith("["):
        end = node.find("]")
        return node[1:end] if end != -1 else node[1:]
    # A single colon means IPv4 with port; bare IPv6 has several
    if node.count(":") == 1:
        return node.split(":", 1)[0]
    return node


def _forwarded_for_node(element: str) -> str:
    """Reduce an RFC 7239 element (``for=192.0.2.60;proto=http``) to its ``for`` node.

    Elements without a ``for=`` pair are returned unchanged so plain address
    lists sent under the ``Forwarded`` name still work.
    """
    for pair in element.split(";"):
        key, sep, value = pair.strip().partition("=")
        if sep and key.strip().lower() == "for":
            return _strip_port(value.strip().strip('"'))
    return element


def split_header_addresses(header_name: str, value: str) -> list[str]:
    """Split a forwarding header into claimed addresses, client first.

    Empty segments are kept as ``""`` so a blank hop stays in its position.
    """
    entries = [entry.strip() for entry in value.split(",")]
    if normalize_header_name(header_name) == FORWARDED_HEADER:
        entries = [_forwarded_for_node(entry) for entry in entries]
    return entries


class AddressResolver:
    """Works out which address a request really came from.

    Precedence, first success wins:

    1. remote echo lookup, when requested;
    2. the transport peer address, unless it is a trusted proxy;
    3. forwarding headers, when enabled, read right to left past trusted proxies;
    4. the peer address even if it is a trusted proxy.

    ``resolve`` returns an empty string when nothing usable was found; deciding
    what to do about that is left to the caller.
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        remote_lookup: "RemoteAddressLookup | None" = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            config: Resolver settings. Defaults to ``ResolverConfig()``.
            remote_lookup: Optional adapter for the remote "what is my IP" service.
        """
        self._config = config or ResolverConfig()
        self._remote_lookup = remote_lookup

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def reconfigure(self, config: ResolverConfig) -> None:
        """Swap in a new configuration snapshot.

        In-flight calls keep the snapshot they started with.
        """
        if not isinstance(config, ResolverConfig):
            raise TypeError("config must be a ResolverConfig instance")
        self._config = config

    async def resolve(
        self, request_meta: RequestMetadata, remote_lookup: bool | None = None
    ) -> str:
        """Return the client IP address of a request, or ``""`` if none was found.

        Args:
            request_meta: Peer address and headers of the request.
            remote_lookup: Ask the remote echo service first. ``None`` uses
                the ``remote_lookup_enabled`` setting.
        """
        config = self._config
        if remote_lookup is None:
            remote_lookup = config.remote_lookup_enabled

        if remote_lookup:
            remote_ip = await self._get_remote_ip(config)
            if remote_ip is not None:
                return remote_ip

        local_ip = self._get_local_ip(request_meta)
        if local_ip is not None and not config.is_trusted_proxy(local_ip):
            # Peer is not a known proxy, so its headers are not believed
            return local_ip

        proxied_ip = self._get_proxied_ip(request_meta, config)
        if proxied_ip is not None:
            return proxied_ip

        return local_ip or ""

    async def _get_remote_ip(self, config: ResolverConfig) -> str | None:
        """Ask the remote echo service, treating any failure as no result."""
        if self._remote_lookup is None:
            logger.debug("Remote IP lookup requested but no lookup service is configured")
            return None
        try:
            ip = await self._remote_lookup.lookup(
                config.remote_lookup_url, config.remote_lookup_timeout_seconds
            )
        except Exception as e:
            logger.warning(f"Remote IP lookup failed, falling back to local resolution: {e}")
            return None
        if ip is not None and is_valid_ip(ip):
            return ip
        return None

    @staticmethod
    def _get_local_ip(request_meta: RequestMetadata) -> str | None:
        """Return the transport peer address if it is a valid IP literal."""
        peer = request_meta.peer_address
        if peer and is_valid_ip(peer):
            return peer
        return None

    @staticmethod
    def _get_proxied_ip(request_meta: RequestMetadata, config: ResolverConfig) -> str | None:
        """Read the client address from the first forwarding header present.

        See https://en.wikipedia.org/wiki/X-Forwarded-For
        """
        if not config.use_proxy_headers:
            return None

        for name in config.proxy_header_names:
            value = request_meta.header(name)
            if value is None:
                continue

            addresses = [
                address
                for address in split_header_addresses(name, value)
                if not config.is_trusted_proxy(address)
            ]
            if not addresses:
                # Whole chain is trusted; nothing is known beyond it
                return None

            # With trusted proxies removed, the right-most entry is the first hop
            # we know nothing about, so treat it as the originating address.
            candidate = addresses[-1]
            if is_valid_ip(candidate):
                return candidate
            logger.debug(f"Ignoring {name}: first untrusted hop {candidate!r} is not an IP")
            return None

        return None
