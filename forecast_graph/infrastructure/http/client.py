"""Shared httpx client construction."""

import logging

import httpx

from forecast_graph.config.settings import Settings

logger = logging.getLogger(__name__)


def create_async_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Build an AsyncClient configured from settings.

    Args:
        settings: Application settings (timeout)
        transport: Optional transport override, used by tests

    Returns:
        A new AsyncClient; the caller owns it and must close it
    """
    logger.debug("Creating HTTP client (timeout=%.1fs)", settings.http_timeout)
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        follow_redirects=True,
        transport=transport,
    )
