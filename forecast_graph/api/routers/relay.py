"""CORS relay for the wave-forecast API.

Mirrors exactly one upstream path, adds the server-side bearer token and
allows any origin. Everything else is refused.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from forecast_graph.api.dependencies import get_settings_dependency
from forecast_graph.config.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_relay_client(request: Request) -> httpx.AsyncClient:
    """HTTP client created in the relay lifespan."""
    return request.app.state.http_client


@router.api_route("/{path:path}", methods=_ALL_METHODS, include_in_schema=False)
async def relay(
    path: str,
    request: Request,
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
    client: httpx.AsyncClient = Depends(get_relay_client),  # noqa: B008
) -> Response:
    """Forward GET requests for the fairway wave forecast upstream."""
    if request.method != "GET":
        return PlainTextResponse("Method Not Allowed", status_code=405, headers=CORS_HEADERS)

    if request.url.path != settings.relay_path:
        return PlainTextResponse("Not Found", status_code=404, headers=CORS_HEADERS)

    target = settings.relay_upstream_url
    if request.url.query:
        target = f"{target}?{request.url.query}"

    try:
        upstream = await client.get(
            target,
            headers={"Authorization": f"Bearer {settings.barentswatch_token}"},
        )
    except httpx.HTTPError as e:
        logger.error("Relay request to %s failed: %s", target, e)
        return JSONResponse({"error": str(e)}, status_code=500, headers=CORS_HEADERS)

    headers = dict(CORS_HEADERS)
    content_type = upstream.headers.get("content-type")
    if content_type:
        headers["Content-Type"] = content_type
    logger.info("Relayed %s -> %s", request.url.path, upstream.status_code)
    return Response(content=upstream.content, status_code=upstream.status_code, headers=headers)
