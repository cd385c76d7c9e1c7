"""Widget display state."""

from dataclasses import dataclass


@dataclass
class WidgetState:
    """What a widget instance currently shows."""

    svg_html: str | None = None  # normalized svg being displayed
    is_loading: bool = False
    error: str | None = None
    raw_svg: str | None = None  # last good un-normalized svg (fallback snapshot)
