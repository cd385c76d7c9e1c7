"""Widget endpoints."""

from fastapi import APIRouter, Depends, Path
from fastapi.responses import HTMLResponse

from forecast_graph.api.dependencies import get_registry
from forecast_graph.api.models import OperationResponse, WidgetStateResponse
from forecast_graph.config.constants import WIDGET_ID_PATTERN
from forecast_graph.config.widget_config import WidgetConfig
from forecast_graph.services.widgets.registry import WidgetRegistry

router = APIRouter()


@router.put("/{widget_id}", response_model=WidgetStateResponse)
async def configure_widget(
    config: WidgetConfig,
    widget_id: str = Path(..., pattern=WIDGET_ID_PATTERN),
    registry: WidgetRegistry = Depends(get_registry),  # noqa: B008
) -> WidgetStateResponse:
    """
    Create a widget or apply new configuration to it.

    Waits for the initial load so the response reflects the fetched graph.
    """
    widget = await registry.configure(widget_id, config)
    return WidgetStateResponse.from_widget(widget)


@router.get("/{widget_id}", response_model=WidgetStateResponse)
async def get_widget(
    widget_id: str = Path(..., pattern=WIDGET_ID_PATTERN),
    registry: WidgetRegistry = Depends(get_registry),  # noqa: B008
) -> WidgetStateResponse:
    """Current display state."""
    return WidgetStateResponse.from_widget(registry.get(widget_id))


@router.get("/{widget_id}/config", response_model=WidgetConfig, response_model_by_alias=True)
async def get_widget_config(
    widget_id: str = Path(..., pattern=WIDGET_ID_PATTERN),
    registry: WidgetRegistry = Depends(get_registry),  # noqa: B008
) -> WidgetConfig:
    """Configuration as last written by the host or by the widget itself."""
    return registry.stored_config(widget_id)


@router.get("/{widget_id}/render", response_class=HTMLResponse)
async def render_widget(
    widget_id: str = Path(..., pattern=WIDGET_ID_PATTERN),
    registry: WidgetRegistry = Depends(get_registry),  # noqa: B008
) -> HTMLResponse:
    """Themed widget markup."""
    return HTMLResponse(registry.get(widget_id).render())


@router.post("/{widget_id}/refresh", response_model=WidgetStateResponse)
async def refresh_widget(
    widget_id: str = Path(..., pattern=WIDGET_ID_PATTERN),
    registry: WidgetRegistry = Depends(get_registry),  # noqa: B008
) -> WidgetStateResponse:
    """Manual refresh; same path as a timer tick."""
    widget = registry.get(widget_id)
    await widget.refresh()
    return WidgetStateResponse.from_widget(widget)


@router.delete("/{widget_id}", response_model=OperationResponse)
async def delete_widget(
    widget_id: str = Path(..., pattern=WIDGET_ID_PATTERN),
    registry: WidgetRegistry = Depends(get_registry),  # noqa: B008
) -> OperationResponse:
    """Dispose a widget and its timer."""
    registry.remove(widget_id)
    return OperationResponse(id=widget_id)
