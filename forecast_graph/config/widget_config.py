"""Per-instance widget configuration (graph source, refresh and theme)."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from forecast_graph.config.constants import PLACEHOLDER_PREFIX


class WidgetConfig(BaseModel):
    """Configuration of one widget instance.

    Field names are snake_case in Python and camelCase on the wire, matching
    the host's configuration object. Instances are immutable; a configuration
    write produces a new instance via ``model_copy(update=...)``.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Source / refresh
    source_url: str = Field("", description="Remote graph URL (SVG or JSON)")
    api_token: str | None = Field(None, description="Bearer token sent to the source")
    auto_refresh_enabled: bool = True
    refresh_interval: int = Field(0, ge=0, description="Refresh interval in milliseconds")
    svg_code: str = Field("", description="Inline SVG used as offline fallback")

    # General
    overall_background: str = "#ffffff"
    padding: float = 0

    # Logos / text
    logo_color: str = "#000000"
    yr_logo_background_color: str = "#00b8f1"
    yr_logo_text_color: str = "#ffffff"
    y_axis_icon_color: str = "#56616c"
    main_text_color: str = "#21292b"
    secondary_text_color: str = "#56616c"

    # Grid
    grid_line_color: str = "#c3d0d8"
    grid_line_width: float = 1
    grid_line_opacity: float = Field(1.0, ge=0, le=1)

    # Curves / bars
    temperature_line_color: str = "#c60000"
    wind_line_color: str = "#aa00f2"
    wind_gust_line_color: str = "#aa00f2"
    precipitation_bar_color: str = "#006edb"
    max_precipitation_color: str = "#006edb"

    # Coast graph
    coast_wind_color: str = "#aa00f2"
    coast_wind_gust_color: str = "#aa00f2"
    wave_height_color: str = "#006edb"
    sea_current_color: str = "#00a69c"
    sea_air_temp_color: str = "#c60000"
    sea_water_temp_color: str = "#0090a8"

    # UI
    refresh_icon_color: str = "#21292b"

    @property
    def has_inline_svg(self) -> bool:
        """True when svg_code holds usable markup rather than a placeholder."""
        code = self.svg_code.strip()
        return bool(code) and not code.startswith(PLACEHOLDER_PREFIX)

    def fetch_settings_differ(self, other: "WidgetConfig") -> bool:
        """True when a change affects what is fetched or how often."""
        return (
            self.source_url != other.source_url
            or self.auto_refresh_enabled != other.auto_refresh_enabled
            or self.refresh_interval != other.refresh_interval
        )
