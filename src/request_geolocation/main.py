"""Main entry point for the request geolocation service."""

import asyncio
import logging
import sys

import aiohttp
import uvicorn
from pydantic import ValidationError

from request_geolocation.adapters.config import AppConfig
from request_geolocation.adapters.geo_api import default_providers
from request_geolocation.adapters.remote_address_lookup import HttpRemoteAddressLookup
from request_geolocation.adapters.web.app import create_app
from request_geolocation.application.services import AddressResolver, LocationEnricher

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


async def main() -> None:
    """Main application entry point."""
    try:
        config = AppConfig()
    except ValidationError as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(config.log_level)
    resolver_config = config.to_resolver_config()
    logger.info(
        f"Proxy headers {'enabled' if resolver_config.use_proxy_headers else 'disabled'}, "
        f"{len(resolver_config.trusted_proxies)} trusted proxy address(es)"
    )

    # One aiohttp session shared by the remote lookup and all providers
    async with aiohttp.ClientSession() as session:
        resolver = AddressResolver(resolver_config, remote_lookup=HttpRemoteAddressLookup(session))
        enricher = LocationEnricher(
            default_providers(session, timeout_seconds=config.provider_timeout_seconds),
            timeout_seconds=config.provider_timeout_seconds,
        )
        app = create_app(resolver, enricher, require_location=config.require_location)

        server = uvicorn.Server(
            uvicorn.Config(
                app,
                host=config.host,
                port=config.port,
                log_level=config.log_level.lower(),
            )
        )
        try:
            await server.serve()
        except KeyboardInterrupt:
            logger.info("Shutting down...")


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
