"""Fetch result models."""

from dataclasses import dataclass
from typing import Any

from forecast_graph.config.constants import ErrorKind


@dataclass(frozen=True)
class SvgText:
    """Fetched content classified as SVG markup."""

    text: str


@dataclass(frozen=True)
class JsonPayload:
    """Fetched content classified as JSON."""

    data: Any


@dataclass(frozen=True)
class FetchFailure:
    """Fetch that produced no usable content."""

    kind: ErrorKind
    reason: str


FetchResult = SvgText | JsonPayload | FetchFailure
