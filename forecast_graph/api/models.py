"""Request/Response models for API endpoints."""

from pydantic import BaseModel, Field

from forecast_graph.orchestrator.widget import GraphWidget


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")


class WidgetStateResponse(BaseModel):
    """Current display state of a widget."""

    id: str = Field(..., description="Widget identifier")
    svg_html: str | None = Field(None, description="Normalized SVG being displayed")
    error: str | None = Field(None, description="User-visible error, if any")
    is_loading: bool = False
    svg_code: str = Field("", description="Inline fallback SVG currently stored in config")
    refresh_active: bool = Field(False, description="Whether the refresh timer is armed")

    @classmethod
    def from_widget(cls, widget: GraphWidget) -> "WidgetStateResponse":
        return cls(
            id=widget.widget_id,
            svg_html=widget.state.svg_html,
            error=widget.state.error,
            is_loading=widget.state.is_loading,
            svg_code=widget.config.svg_code,
            refresh_active=widget.scheduler.is_active,
        )


class OperationResponse(BaseModel):
    """Generic response for write operations."""

    status: str = "success"
    id: str | None = None
