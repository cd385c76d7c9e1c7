"""Graph source fetcher."""

import json
import logging
import re
from urllib.parse import quote

import httpx

from forecast_graph.config.constants import (
    ACCEPT_HEADER,
    MSG_UNSUPPORTED_CONTENT_TYPE,
    ErrorKind,
    PipelineStep,
    log_pipeline_step,
)
from forecast_graph.config.settings import Settings
from forecast_graph.infrastructure.http.client import create_async_client
from forecast_graph.services.fetch.models import FetchFailure, FetchResult, JsonPayload, SvgText

logger = logging.getLogger(__name__)

_SVG_TAG_RE = re.compile(r"<(/?)svg\b[^>]*?(/?)>", re.IGNORECASE)


def _first_svg_element(text: str) -> str | None:
    """First complete ``<svg>`` element, counting nested svg tags."""
    depth = 0
    start = None
    for match in _SVG_TAG_RE.finditer(text):
        closing, self_closing = match.group(1), match.group(2)
        if closing:
            if depth == 0:
                continue
            depth -= 1
            if depth == 0:
                return text[start : match.end()]
        elif self_closing:
            if depth == 0:
                return match.group(0)
        else:
            if depth == 0:
                start = match.start()
            depth += 1
    return None


def extract_svg_markup(text: str) -> str | None:
    """
    Pull SVG markup out of fetched text.

    Text that already starts with ``<svg`` or ``<?xml`` is returned trimmed;
    otherwise the first complete ``<svg>`` element embedded in an HTML page
    is returned. None when no SVG element is present.
    """
    trimmed = text.strip()
    if trimmed.startswith("<svg") or trimmed.startswith("<?xml"):
        return trimmed
    return _first_svg_element(trimmed)


def build_headers(token: str | None) -> dict[str, str]:
    """Request headers for a graph fetch."""
    headers = {"Accept": ACCEPT_HEADER}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class SvgFetcher:
    """Retrieves graph content and classifies it as SVG or JSON."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.settings = settings
        self._client = client or create_async_client(settings)

    def _request_url(self, url: str) -> str:
        relay = self.settings.cors_relay_url
        if relay:
            return f"{relay}{quote(url, safe='')}"
        return url

    async def fetch(self, url: str, token: str | None = None) -> FetchResult:
        """
        Perform a single read of the graph source.

        Never raises: network and parse problems come back as FetchFailure.
        """
        log_pipeline_step(PipelineStep.FETCH)
        request_url = self._request_url(url)
        try:
            response = await self._client.get(request_url, headers=build_headers(token))
        except httpx.HTTPError as e:
            logger.warning("Graph fetch failed for %s: %s", url, e)
            return FetchFailure(ErrorKind.NETWORK_ERROR, f"Network error: {e}")
        except Exception as e:
            # Malformed URLs (httpx.InvalidURL) and other client-side failures.
            logger.error("Graph fetch raised for %s: %s", url, e, exc_info=True)
            return FetchFailure(ErrorKind.NETWORK_ERROR, f"Network error: {e}")

        if not response.is_success:
            logger.warning("Graph fetch for %s returned HTTP %s", url, response.status_code)
            return FetchFailure(ErrorKind.NETWORK_ERROR, f"Network error: {response.status_code}")

        content_type = response.headers.get("content-type", "").lower()

        if "application/json" in content_type:
            try:
                return JsonPayload(json.loads(response.text))
            except (ValueError, RecursionError) as e:
                logger.warning("Invalid JSON from %s: %s", url, e)
                return FetchFailure(ErrorKind.PARSE_ERROR, f"Parse error: {e}")

        text = response.text
        if "image/svg+xml" in content_type or "<svg" in text:
            svg = extract_svg_markup(text)
            return SvgText(svg if svg is not None else text.strip())

        logger.warning("Unsupported content type from %s: %r", url, content_type)
        return FetchFailure(ErrorKind.UNSUPPORTED_CONTENT_TYPE, MSG_UNSUPPORTED_CONTENT_TYPE)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
