"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from forecast_graph.api.routers import api_router
from forecast_graph.config.settings import Settings, get_settings
from forecast_graph.infrastructure.logging.logger import setup_logging
from forecast_graph.services.widgets.registry import WidgetRegistry

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> None:
    """Validate configuration at startup."""
    if settings.cors_relay_url:
        logger.info("Graph sources are fetched through relay %s", settings.cors_relay_url)
    else:
        logger.info("Graph sources are fetched directly (no CORS relay configured)")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    logger.info("Starting %s", settings.app_name)
    _validate_startup_config(settings)
    app.state.registry = WidgetRegistry(settings)

    yield
    logger.info("Shutting down %s", settings.app_name)
    try:
        await app.state.registry.close()
        logger.info("Widgets disposed and HTTP client closed")
    except Exception as e:
        logger.error("Error closing widget registry: %s", e, exc_info=True)


app = FastAPI(
    title=settings.app_name,
    description="Themed weather-forecast graph widgets with auto-refresh",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.include_router(api_router, prefix="/api")


def main() -> None:
    """Run the widget service with uvicorn."""
    uvicorn.run(app, host="0.0.0.0", port=8000, log_config=None)


if __name__ == "__main__":
    main()
