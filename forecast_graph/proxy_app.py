"""CORS relay proxy entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from forecast_graph.api.routers.relay import router as relay_router
from forecast_graph.config.settings import get_settings
from forecast_graph.infrastructure.http.client import create_async_client
from forecast_graph.infrastructure.logging.logger import setup_logging

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    if not settings.barentswatch_token:
        logger.warning("BARENTSWATCH_TOKEN is empty; upstream will likely reject requests")
    app.state.http_client = create_async_client(settings)
    logger.info("Relay forwarding %s -> %s", settings.relay_path, settings.relay_upstream_url)
    yield
    await app.state.http_client.aclose()
    logger.info("Relay shut down")


app = FastAPI(
    title="Forecast Graph Relay",
    description="Single-route CORS relay for the wave-forecast API",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.include_router(relay_router)


def main() -> None:
    """Run the relay with uvicorn."""
    logger.info("Proxy listening on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
