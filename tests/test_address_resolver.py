"""Behavior-focused tests for client address resolution."""

from unittest.mock import AsyncMock

import pytest

from request_geolocation.application.services import AddressResolver
from request_geolocation.application.services.address_resolver import split_header_addresses
from request_geolocation.domain.models import RequestMetadata, ResolverConfig

PROXY = "203.0.113.9"
CLIENT = "198.51.100.1"


def _meta(peer: str | None, **headers: str) -> RequestMetadata:
    return RequestMetadata.from_raw_headers(
        peer, [(name.replace("_", "-"), value) for name, value in headers.items()]
    )


def _proxy_config(**overrides: object) -> ResolverConfig:
    settings: dict[str, object] = {"use_proxy_headers": True, "trusted_proxies": [PROXY]}
    settings.update(overrides)
    return ResolverConfig(**settings)


class TestPeerAddress:
    """Tests for resolution from the transport peer address."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"X_Forwarded_For": "1.1.1.1"},
            {"Forwarded": "for=8.8.8.8", "Client_Ip": "9.9.9.9"},
            {"X_Forwarded_For": "garbage, , 1.2.3.4"},
        ],
    )
    async def test_when_proxy_headers_disabled_then_headers_never_influence_result(
        self, headers: dict[str, str]
    ) -> None:
        """Given use_proxy_headers=false, when resolving, then the peer address is returned."""
        resolver = AddressResolver(ResolverConfig(trusted_proxies=[PROXY]))

        assert await resolver.resolve(_meta(PROXY, **headers)) == PROXY

    @pytest.mark.asyncio
    async def test_when_peer_not_trusted_then_returns_peer_unchanged(self) -> None:
        """Given peer outside the trusted set, when resolving, then the peer is returned."""
        resolver = AddressResolver(_proxy_config())

        result = await resolver.resolve(_meta("192.0.2.44", X_Forwarded_For=CLIENT))

        assert result == "192.0.2.44"

    @pytest.mark.asyncio
    async def test_when_no_peer_and_no_headers_then_returns_empty_string(self) -> None:
        """Given no peer and no headers, when resolving, then an empty string is returned."""
        resolver = AddressResolver()

        assert await resolver.resolve(RequestMetadata()) == ""

    @pytest.mark.asyncio
    async def test_when_peer_is_not_an_ip_then_treated_as_absent(self) -> None:
        """Given a peer that is a hostname, when resolving, then an empty string is returned."""
        resolver = AddressResolver()

        assert await resolver.resolve(_meta("testclient")) == ""


class TestProxyHeaders:
    """Tests for resolution through forwarding headers."""

    @pytest.mark.asyncio
    async def test_when_peer_is_trusted_then_returns_right_most_untrusted_entry(self) -> None:
        """Given a trusted peer and an XFF chain, when resolving, then the right-most untrusted entry wins."""
        resolver = AddressResolver(_proxy_config())

        result = await resolver.resolve(
            _meta(PROXY, X_Forwarded_For=f"{CLIENT}, {PROXY}")
        )

        assert result == CLIENT

    @pytest.mark.asyncio
    async def test_when_client_prepends_fake_address_then_it_is_ignored(self) -> None:
        """Given a spoofed left-most entry, when resolving, then the address seen by our proxy wins."""
        resolver = AddressResolver(_proxy_config())

        result = await resolver.resolve(
            _meta(PROXY, X_Forwarded_For=f"6.6.6.6, {CLIENT}, {PROXY}")
        )

        assert result == CLIENT

    @pytest.mark.asyncio
    async def test_when_whole_chain_is_trusted_then_falls_back_to_peer(self) -> None:
        """Given every header entry is trusted, when resolving, then the peer fallback is used."""
        resolver = AddressResolver(_proxy_config(trusted_proxies=[PROXY, CLIENT]))

        result = await resolver.resolve(_meta(PROXY, X_Forwarded_For=f"{CLIENT}, {PROXY}"))

        assert result == PROXY

    @pytest.mark.asyncio
    async def test_when_first_present_header_is_inconclusive_then_later_headers_are_ignored(
        self,
    ) -> None:
        """Given an all-trusted first header, when resolving, then later headers are not consulted."""
        resolver = AddressResolver(_proxy_config())

        result = await resolver.resolve(
            _meta(PROXY, X_Forwarded_For=PROXY, Client_Ip=CLIENT)
        )

        assert result == PROXY

    @pytest.mark.asyncio
    async def test_headers_are_checked_in_priority_order(self) -> None:
        """Given two headers, when resolving, then the higher-priority header decides."""
        resolver = AddressResolver(
            _proxy_config(proxy_header_names=["Client-Ip", "X-Forwarded-For"])
        )

        result = await resolver.resolve(
            _meta(PROXY, X_Forwarded_For="192.0.2.1", Client_Ip="192.0.2.2")
        )

        assert result == "192.0.2.2"

    @pytest.mark.asyncio
    async def test_absent_headers_are_skipped(self) -> None:
        """Given only a low-priority header, when resolving, then it is used."""
        resolver = AddressResolver(_proxy_config())

        result = await resolver.resolve(_meta(PROXY, X_Cluster_Client_Ip=CLIENT))

        assert result == CLIENT

    @pytest.mark.asyncio
    async def test_when_right_most_untrusted_entry_is_invalid_then_falls_back_to_peer(
        self,
    ) -> None:
        """Given garbage as first untrusted hop, when resolving, then nothing left of it is believed."""
        resolver = AddressResolver(_proxy_config())

        result = await resolver.resolve(
            _meta(PROXY, X_Forwarded_For=f"{CLIENT}, unknown, {PROXY}")
        )

        assert result == PROXY

    @pytest.mark.asyncio
    async def test_when_peer_missing_then_headers_are_consulted(self) -> None:
        """Given no usable peer, when resolving with proxy headers on, then the header is used."""
        resolver = AddressResolver(_proxy_config())

        result = await resolver.resolve(_meta(None, X_Forwarded_For=CLIENT))

        assert result == CLIENT

    @pytest.mark.asyncio
    async def test_configured_spelling_does_not_change_lookup(self) -> None:
        """Given equivalent header spellings, when resolving, then results are identical."""
        meta = _meta(PROXY, X_Forwarded_For=f"{CLIENT}, {PROXY}")
        upper = AddressResolver(_proxy_config(proxy_header_names=["X-Forwarded-For"]))
        lower = AddressResolver(_proxy_config(proxy_header_names=["x-forwarded-for"]))

        assert await upper.resolve(meta) == await lower.resolve(meta) == CLIENT

    @pytest.mark.asyncio
    async def test_rfc7239_forwarded_header_is_parsed(self) -> None:
        """Given a Forwarded header, when resolving, then the for= node of the last hop is used."""
        resolver = AddressResolver(_proxy_config())

        result = await resolver.resolve(
            _meta(
                PROXY,
                Forwarded=f'for="[2001:db8::7]:4711";proto=https, for={PROXY}:443;by=10.0.0.1',
            )
        )

        assert result == "2001:db8::7"


class TestHeaderAliases:
    """Tests for client-sent headers that spell a forwarding header differently."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("alias", ["Http-X-Forwarded-For", "X_Forwarded_For"])
    async def test_alias_is_not_merged_into_forwarding_header(self, alias: str) -> None:
        """Given a client-sent alias of XFF, when resolving, then the alias is ignored."""
        resolver = AddressResolver(_proxy_config())
        meta = RequestMetadata.from_raw_headers(
            PROXY, [("X-Forwarded-For", CLIENT), (alias, "6.6.6.6")]
        )

        assert meta.header("X-Forwarded-For") == CLIENT
        assert await resolver.resolve(meta) == CLIENT


class TestBlankHops:
    """Tests for empty segments in forwarding headers."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["6.6.6.6, ", "6.6.6.6,", f"6.6.6.6, , {PROXY}"])
    async def test_when_right_most_untrusted_segment_is_blank_then_falls_back_to_peer(
        self, value: str
    ) -> None:
        """Given a blank right-most untrusted hop, when resolving, then the peer is used."""
        resolver = AddressResolver(_proxy_config())

        assert await resolver.resolve(_meta(PROXY, X_Forwarded_For=value)) == PROXY

    @pytest.mark.asyncio
    async def test_blank_and_invalid_hops_behave_alike(self) -> None:
        """Given a blank or a non-IP right-most hop, when resolving, then results match."""
        resolver = AddressResolver(_proxy_config())

        blank = await resolver.resolve(_meta(PROXY, X_Forwarded_For="6.6.6.6, "))
        unknown = await resolver.resolve(_meta(PROXY, X_Forwarded_For="6.6.6.6, unknown"))

        assert blank == unknown == PROXY


class TestSplitHeaderAddresses:
    """Tests for forwarding header splitting."""

    def test_x_forwarded_for_is_split_and_trimmed(self) -> None:
        """Given an XFF value with spaces and blanks, when splitting, then blanks keep their place."""
        assert split_header_addresses("X-Forwarded-For", " 1.1.1.1 ,, 2.2.2.2 ") == [
            "1.1.1.1",
            "",
            "2.2.2.2",
        ]

    def test_forwarded_elements_are_reduced_to_for_node(self) -> None:
        """Given Forwarded elements, when splitting, then for= values lose quotes and ports."""
        result = split_header_addresses(
            "Forwarded", 'for=192.0.2.60;proto=http, For="198.51.100.17:8080", by=10.0.0.1'
        )

        assert result == ["192.0.2.60", "198.51.100.17", "by=10.0.0.1"]


class TestRemoteLookup:
    """Tests for the optional remote echo lookup."""

    @pytest.mark.asyncio
    async def test_when_remote_lookup_succeeds_then_it_wins(self) -> None:
        """Given a working echo service, when resolving with remote lookup, then its answer wins."""
        lookup = AsyncMock()
        lookup.lookup.return_value = "192.0.2.200"
        resolver = AddressResolver(remote_lookup=lookup)

        result = await resolver.resolve(_meta("127.0.0.1"), remote_lookup=True)

        assert result == "192.0.2.200"

    @pytest.mark.asyncio
    async def test_when_remote_lookup_fails_then_falls_back_to_peer(self) -> None:
        """Given an echo service that raises, when resolving, then the peer is used."""
        lookup = AsyncMock()
        lookup.lookup.side_effect = OSError("network down")
        resolver = AddressResolver(remote_lookup=lookup)

        result = await resolver.resolve(_meta("127.0.0.1"), remote_lookup=True)

        assert result == "127.0.0.1"

    @pytest.mark.asyncio
    async def test_when_remote_lookup_returns_invalid_body_then_falls_back(self) -> None:
        """Given an echo service returning garbage, when resolving, then the peer is used."""
        lookup = AsyncMock()
        lookup.lookup.return_value = "<html>oops</html>"
        resolver = AddressResolver(remote_lookup=lookup)

        result = await resolver.resolve(_meta("127.0.0.1"), remote_lookup=True)

        assert result == "127.0.0.1"

    @pytest.mark.asyncio
    async def test_when_not_requested_then_remote_service_is_not_called(self) -> None:
        """Given remote lookup disabled, when resolving, then the echo service is not called."""
        lookup = AsyncMock()
        resolver = AddressResolver(remote_lookup=lookup)

        await resolver.resolve(_meta("127.0.0.1"))

        lookup.lookup.assert_not_called()

    @pytest.mark.asyncio
    async def test_config_flag_enables_remote_lookup_by_default(self) -> None:
        """Given remote_lookup_enabled in config, when resolving without override, then it is used."""
        lookup = AsyncMock()
        lookup.lookup.return_value = "192.0.2.200"
        resolver = AddressResolver(ResolverConfig(remote_lookup_enabled=True), lookup)

        assert await resolver.resolve(_meta("127.0.0.1")) == "192.0.2.200"
        assert await resolver.resolve(_meta("127.0.0.1"), remote_lookup=False) == "127.0.0.1"

    @pytest.mark.asyncio
    async def test_when_no_lookup_service_configured_then_peer_is_used(self) -> None:
        """Given no echo service, when remote lookup is requested, then the peer is used."""
        resolver = AddressResolver()

        assert await resolver.resolve(_meta("127.0.0.1"), remote_lookup=True) == "127.0.0.1"


class TestReconfigure:
    """Tests for configuration snapshot swapping."""

    @pytest.mark.asyncio
    async def test_reconfigure_swaps_whole_snapshot(self) -> None:
        """Given a new config, when reconfiguring, then later resolutions use it."""
        resolver = AddressResolver()
        meta = _meta(PROXY, X_Forwarded_For=CLIENT)
        assert await resolver.resolve(meta) == PROXY

        resolver.reconfigure(_proxy_config())

        assert resolver.config.use_proxy_headers is True
        assert await resolver.resolve(meta) == CLIENT

    @pytest.mark.asyncio
    async def test_reconfigure_changes_remote_lookup_url_and_timeout(self) -> None:
        """Given a new lookup URL, when reconfiguring, then the next lookup uses it."""
        lookup = AsyncMock()
        lookup.lookup.return_value = "192.0.2.200"
        resolver = AddressResolver(
            ResolverConfig(remote_lookup_enabled=True, remote_lookup_url="http://old.example/"),
            lookup,
        )
        await resolver.resolve(_meta("127.0.0.1"))

        resolver.reconfigure(
            ResolverConfig(
                remote_lookup_enabled=True,
                remote_lookup_url="http://new.example/",
                remote_lookup_timeout_seconds=1.5,
            )
        )
        await resolver.resolve(_meta("127.0.0.1"))

        assert lookup.lookup.await_args_list[0].args == ("http://old.example/", 3.0)
        assert lookup.lookup.await_args_list[1].args == ("http://new.example/", 1.5)

    def test_reconfigure_rejects_other_types(self) -> None:
        """Given a dict, when reconfiguring, then TypeError is raised."""
        resolver = AddressResolver()

        with pytest.raises(TypeError):
            resolver.reconfigure({"use_proxy_headers": True})  # type: ignore[arg-type]
