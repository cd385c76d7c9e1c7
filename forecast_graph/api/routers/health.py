"""Health endpoint."""

from fastapi import APIRouter, Depends

from forecast_graph.api.dependencies import get_settings_dependency
from forecast_graph.api.models import HealthResponse
from forecast_graph.config.settings import Settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> HealthResponse:
    """Liveness check."""
    return HealthResponse(status="healthy", version=settings.app_version)
