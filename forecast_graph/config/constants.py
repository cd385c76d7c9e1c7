"""
Constants, enums, and static values.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Failure categories surfaced by the graph pipeline."""

    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"
    UNSUPPORTED_CONTENT_TYPE = "unsupported_content_type"
    INVALID_SVG_CONTENT = "invalid_svg_content"
    INVALID_JSON_FORMAT = "invalid_json_format"
    MISSING_TIMESERIES = "missing_timeseries"
    MISSING_WAVE_HEIGHT = "missing_wave_height"


class PipelineStep(str, Enum):
    """Graph pipeline execution steps."""
    FETCH = "fetch"
    SYNTHESIZE = "synthesize"
    NORMALIZE = "normalize"
    RECOLOR = "recolor"
    RENDER = "render"


class PipelineStepDescription(str, Enum):
    """Graph pipeline execution step descriptions."""
    FETCH = "Fetch the graph source (SVG or JSON) from the configured URL"
    SYNTHESIZE = "Build a bar-chart SVG from a wave-forecast JSON payload"
    NORMALIZE = "Sanitize the SVG so the theme stylesheet can recolor it"
    RECOLOR = "Derive the scoped theme stylesheet"
    RENDER = "Assemble the widget markup"


def log_pipeline_step(step: PipelineStep) -> None:
    """Log the start of a pipeline step."""
    description = PipelineStepDescription[step.name].value
    logger.debug("[%s] %s", step.value, description)


# HTTP
ACCEPT_HEADER = "image/svg+xml, application/json, text/plain, */*"

# User-visible messages
MSG_MISSING_TIMESERIES = "Missing timeseries in Waveforecast data"
MSG_MISSING_WAVE_HEIGHT = "Wave height missing in timeseries"
MSG_INVALID_JSON_FORMAT = "Invalid JSON format"
MSG_INVALID_SVG = "Invalid SVG content"
MSG_UNSUPPORTED_CONTENT_TYPE = "Unsupported content type"
MSG_NOT_CONFIGURED = "Please configure a Source URL or provide Fallback SVG Code."

# Wave chart geometry (SVG user units)
BAR_WIDTH = 40
BAR_GAP = 8
CHART_HEIGHT = 100
LABEL_MARGIN = 20
WAVE_BAR_COLOR = "#006edb"

# Wave-forecast payload layout
WAVE_PAYLOAD_MARKER = "properties"
WAVE_TIMESERIES_PATH = ("properties", "timeseries")
WAVE_DETAILS_PATH = ("data", "instant", "details")

# Candidate field names per logical field, current name first, legacy after.
WAVE_HEIGHT_FIELDS = ("sea_surface_wave_height", "wave_height")
WAVE_PERIOD_FIELDS = ("sea_surface_wave_period", "wave_period")
WAVE_DIRECTION_FIELDS = ("sea_surface_wave_from_direction", "wave_direction")

# Inline svg_code starting with this marker is a disabled placeholder.
PLACEHOLDER_PREFIX = "<!--"

# Widget ids become part of a CSS class name and every scoped selector.
WIDGET_ID_PATTERN = r"^[A-Za-z0-9_-]+$"
SCOPE_PREFIX = "yrw-"
