"""End-to-end widget flows through the registry."""

import httpx
import pytest

from conftest import SIMPLE_SVG, json_response
from forecast_graph.config.widget_config import WidgetConfig
from forecast_graph.services.svg.normalizer import normalize_svg
from forecast_graph.services.widgets.registry import WidgetRegistry

SOURCE = "https://graph.example.test/forecast"


@pytest.mark.asyncio
async def test_json_wrapped_svg_is_displayed_and_persisted(settings, make_fetcher):
    """A JSON body carrying an ``svg`` field is displayed and written back."""
    registry = WidgetRegistry(settings, fetcher=make_fetcher(lambda request: json_response({"svg": SIMPLE_SVG})))
    config = WidgetConfig(source_url=SOURCE, overall_background="#202020")

    widget = await registry.configure("w1", config)

    assert widget.state.error is None
    assert widget.state.svg_html == normalize_svg(SIMPLE_SVG, "#202020")
    assert registry.stored_config("w1").svg_code == SIMPLE_SVG

    markup = widget.render()
    assert '<div class="svg-image-container">' in markup
    assert 'fill="none"' in markup
    await registry.close()


@pytest.mark.asyncio
async def test_unreachable_source_falls_back_to_inline_svg(settings, make_fetcher):
    """A network failure keeps the error visible while the fallback SVG is shown."""

    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name resolution failed", request=request)

    registry = WidgetRegistry(settings, fetcher=make_fetcher(unreachable))
    config = WidgetConfig(source_url="https://unreachable.invalid/graph.svg", svg_code=SIMPLE_SVG)

    widget = await registry.configure("w1", config)

    assert widget.state.svg_html == normalize_svg(SIMPLE_SVG, "#ffffff")
    assert widget.state.error.startswith("Network error:")
    assert not widget.state.is_loading

    markup = widget.render()
    assert '<div class="graph-error">Network error:' in markup
    assert "Oslo" in markup
    await registry.close()


@pytest.mark.asyncio
async def test_removed_widget_stops_refreshing(settings, make_fetcher):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return json_response({"svg": SIMPLE_SVG})

    registry = WidgetRegistry(settings, fetcher=make_fetcher(handler))
    widget = await registry.configure("w1", WidgetConfig(source_url=SOURCE, refresh_interval=60000))
    assert widget.scheduler.is_active

    registry.remove("w1")

    assert widget.disposed
    assert not widget.scheduler.is_active
    assert "w1" not in registry
    await registry.close()
