"""Starlette application exposing the resolved client location."""

from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from request_geolocation.adapters.web.geolocation_middleware import (
    GeolocationMiddleware,
    get_client_ip,
    get_geo_record,
)
from request_geolocation.domain.ports import ClientAddressResolver, LocationEnricher

HEALTHZ_PATH = "/healthz"


async def whereami(request: Request) -> JSONResponse:
    """Return the geolocation record of the calling client."""
    record = get_geo_record(request)
    if record is None:
        payload: dict[str, Any] = {"ip": get_client_ip(request), "location": None}
    else:
        payload = record.to_dict()
    return JSONResponse(payload)


async def healthz(_request: Request) -> Response:
    """Health check endpoint for load balancers and monitoring."""
    return Response(content="Ok", media_type="text/plain")


def create_app(
    resolver: ClientAddressResolver,
    enricher: LocationEnricher,
    require_location: bool = False,
) -> Starlette:
    """Build the web application with geolocation middleware installed."""
    return Starlette(
        routes=[
            Route("/", whereami, methods=["GET"]),
            Route(HEALTHZ_PATH, healthz, methods=["GET"]),
        ],
        middleware=[
            Middleware(
                GeolocationMiddleware,
                resolver=resolver,
                enricher=enricher,
                require_location=require_location,
                exclude_paths=(HEALTHZ_PATH,),
            )
        ],
    )
