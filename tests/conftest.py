"""Pytest configuration and fixtures."""

from collections.abc import Callable

import httpx
import pytest

from forecast_graph.config.settings import Settings
from forecast_graph.config.widget_config import WidgetConfig
from forecast_graph.services.fetch.fetcher import SvgFetcher

SIMPLE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="200px" height="100px">'
    '<style>text { fill: red; }</style>'
    '<rect width="200" height="100" fill="#ffffff"/>'
    '<text x="10" y="20">Oslo</text>'
    "</svg>"
)

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings():
    """Provide settings fixture."""
    return Settings()


@pytest.fixture
def widget_config():
    """Widget config with a dark theme and no source."""
    return WidgetConfig(
        overall_background="#101820",
        main_text_color="#eeeeee",
        wind_line_color="#111111",
        wind_gust_line_color="#222222",
        grid_line_width=2,
        grid_line_opacity=0.5,
    )


@pytest.fixture
def make_fetcher(settings):
    """Build an SvgFetcher whose HTTP traffic is served by ``handler``."""

    def _make(handler: Handler, fetch_settings: Settings | None = None) -> SvgFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return SvgFetcher(fetch_settings or settings, client=client)

    return _make


def svg_response(text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, text=text, headers={"content-type": "image/svg+xml"})


def json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=data)
