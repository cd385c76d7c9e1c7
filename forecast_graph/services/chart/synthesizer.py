"""Bar-chart SVG synthesis for wave-forecast JSON payloads."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from xml.sax.saxutils import escape

from forecast_graph.config.constants import (
    BAR_GAP,
    BAR_WIDTH,
    CHART_HEIGHT,
    LABEL_MARGIN,
    MSG_INVALID_JSON_FORMAT,
    MSG_MISSING_TIMESERIES,
    MSG_MISSING_WAVE_HEIGHT,
    WAVE_BAR_COLOR,
    WAVE_DETAILS_PATH,
    WAVE_DIRECTION_FIELDS,
    WAVE_HEIGHT_FIELDS,
    WAVE_PAYLOAD_MARKER,
    WAVE_PERIOD_FIELDS,
    WAVE_TIMESERIES_PATH,
    ErrorKind,
    PipelineStep,
    log_pipeline_step,
)
from forecast_graph.services.errors import GraphPipelineError

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"


@dataclass(frozen=True)
class WaveSample:
    """One timeseries entry of a wave forecast."""

    time: str | None
    height: float
    period: float | None = None
    direction: float | None = None


def _dig(data: Any, path: Sequence[str]) -> Any:
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _first_value(entry: dict[str, Any], candidates: Sequence[str]) -> Any:
    """Return the first non-null candidate field, flat or under data.instant.details."""
    details = _dig(entry, WAVE_DETAILS_PATH)
    for source in (entry, details):
        if not isinstance(source, dict):
            continue
        for name in candidates:
            value = source.get(name)
            if value is not None:
                return value
    return None


def _fmt(value: float) -> str:
    """Compact number formatting: 100.0 -> '100', 0.25 -> '0.25'."""
    return f"{value:g}"


def is_wave_payload(payload: Any) -> bool:
    return isinstance(payload, dict) and WAVE_PAYLOAD_MARKER in payload


def parse_wave_samples(payload: Any) -> list[WaveSample]:
    """
    Extract wave samples from a wave-forecast payload.

    Raises:
        GraphPipelineError: timeseries missing or empty, or any entry without a height
    """
    timeseries = _dig(payload, WAVE_TIMESERIES_PATH)
    if not isinstance(timeseries, list) or not timeseries:
        raise GraphPipelineError(ErrorKind.MISSING_TIMESERIES, MSG_MISSING_TIMESERIES)

    samples: list[WaveSample] = []
    for index, entry in enumerate(timeseries):
        if not isinstance(entry, dict):
            raise GraphPipelineError(ErrorKind.MISSING_WAVE_HEIGHT, MSG_MISSING_WAVE_HEIGHT)
        height = _first_value(entry, WAVE_HEIGHT_FIELDS)
        if height is None:
            logger.warning("Wave sample %d has no height; discarding payload", index)
            raise GraphPipelineError(ErrorKind.MISSING_WAVE_HEIGHT, MSG_MISSING_WAVE_HEIGHT)
        period = _first_value(entry, WAVE_PERIOD_FIELDS)
        direction = _first_value(entry, WAVE_DIRECTION_FIELDS)
        try:
            sample = WaveSample(
                time=str(entry["time"]) if entry.get("time") is not None else None,
                height=float(height),
                period=float(period) if period is not None else None,
                direction=float(direction) if direction is not None else None,
            )
        except (TypeError, ValueError) as e:
            logger.warning("Wave sample %d is not numeric: %s", index, e)
            raise GraphPipelineError(ErrorKind.INVALID_JSON_FORMAT, MSG_INVALID_JSON_FORMAT) from e
        samples.append(sample)
    return samples


def bar_heights(samples: Sequence[WaveSample]) -> list[float]:
    """Bar heights scaled so the tallest sample fills the chart height."""
    max_height = max(s.height for s in samples) or 1
    return [(s.height / max_height) * CHART_HEIGHT for s in samples]


def render_wave_chart(samples: Sequence[WaveSample]) -> str:
    """Render one labelled bar per sample."""
    width = len(samples) * BAR_WIDTH
    height = CHART_HEIGHT + 2 * LABEL_MARGIN
    baseline = LABEL_MARGIN + CHART_HEIGHT

    parts = [
        f'<svg xmlns="{SVG_NS}" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">'
    ]
    for i, (sample, bar_height) in enumerate(zip(samples, bar_heights(samples))):
        x = i * BAR_WIDTH
        center = x + BAR_WIDTH / 2
        top = baseline - bar_height
        title = f"<title>{escape(sample.time)}</title>" if sample.time else ""
        parts.append(
            f'<rect class="wave-bar" x="{_fmt(x + BAR_GAP / 2)}" y="{_fmt(top)}" '
            f'width="{BAR_WIDTH - BAR_GAP}" height="{_fmt(bar_height)}" '
            f'fill="{WAVE_BAR_COLOR}">{title}</rect>'
        )
        parts.append(
            f'<text class="wave-height-label" x="{_fmt(center)}" y="{baseline + 14}" '
            f'text-anchor="middle" font-size="10">{_fmt(sample.height)}</text>'
        )
        if sample.period is not None:
            parts.append(
                f'<text class="wave-period-label" x="{_fmt(center)}" y="12" '
                f'text-anchor="middle" font-size="10">{_fmt(sample.period)}s</text>'
            )
        if sample.direction is not None:
            parts.append(
                f'<text class="wave-direction-label" x="{_fmt(center)}" y="{_fmt(top - 4)}" '
                f'text-anchor="middle" font-size="9">{_fmt(sample.direction)}°</text>'
            )
    parts.append("</svg>")
    return "".join(parts)


def synthesize_svg(payload: Any) -> str:
    """
    Turn a JSON payload into SVG markup.

    A payload carrying an ``svg`` string is passed through unchanged; a
    wave-forecast payload is drawn as a bar chart.

    Raises:
        GraphPipelineError: payload is neither shape, or the wave data is incomplete
    """
    log_pipeline_step(PipelineStep.SYNTHESIZE)
    if isinstance(payload, dict) and isinstance(payload.get("svg"), str):
        return payload["svg"]
    if is_wave_payload(payload):
        samples = parse_wave_samples(payload)
        logger.info("Synthesizing wave chart from %d samples", len(samples))
        return render_wave_chart(samples)
    raise GraphPipelineError(ErrorKind.INVALID_JSON_FORMAT, MSG_INVALID_JSON_FORMAT)
