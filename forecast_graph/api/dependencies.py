"""FastAPI dependencies."""

from functools import lru_cache

from fastapi import Request

from forecast_graph.config.settings import Settings, get_settings
from forecast_graph.services.widgets.registry import WidgetRegistry


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings as a FastAPI dependency."""
    return get_settings()


def get_registry(request: Request) -> WidgetRegistry:
    """Widget registry created in the application lifespan."""
    return request.app.state.registry
