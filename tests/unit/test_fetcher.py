"""Tests for the graph fetcher."""

import httpx
import pytest

from conftest import SIMPLE_SVG, json_response, svg_response
from forecast_graph.config.constants import ErrorKind
from forecast_graph.config.settings import Settings
from forecast_graph.services.fetch.fetcher import build_headers, extract_svg_markup
from forecast_graph.services.fetch.models import FetchFailure, JsonPayload, SvgText

URL = "https://graph.example.test/meteogram.svg"


def test_build_headers_with_token():
    headers = build_headers("abc")
    assert headers["Authorization"] == "Bearer abc"
    assert headers["Accept"] == "image/svg+xml, application/json, text/plain, */*"


def test_build_headers_without_token():
    assert "Authorization" not in build_headers(None)
    assert "Authorization" not in build_headers("")


def test_extract_svg_from_html():
    html = f"<html><body><h1>Forecast</h1>{SIMPLE_SVG}<footer/></body></html>"
    assert extract_svg_markup(html) == SIMPLE_SVG


def test_extract_svg_passthrough_for_xml_prefix():
    text = '  <?xml version="1.0"?><svg/>  '
    assert extract_svg_markup(text) == '<?xml version="1.0"?><svg/>'


def test_extract_svg_none_when_absent():
    assert extract_svg_markup("<html><body>nothing</body></html>") is None


@pytest.mark.asyncio
async def test_fetch_svg_content_type(make_fetcher):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["headers"] = request.headers
        return svg_response(SIMPLE_SVG)

    fetcher = make_fetcher(handler)
    result = await fetcher.fetch(URL, token="secret")
    await fetcher.aclose()

    assert result == SvgText(SIMPLE_SVG)
    assert captured["headers"]["authorization"] == "Bearer secret"
    assert "image/svg+xml" in captured["headers"]["accept"]


@pytest.mark.asyncio
async def test_fetch_svg_sniffed_from_html(make_fetcher):
    page = f"<!doctype html><html><body>{SIMPLE_SVG}</body></html>"
    fetcher = make_fetcher(lambda request: httpx.Response(200, html=page))
    result = await fetcher.fetch(URL)
    assert isinstance(result, SvgText)
    assert result.text == SIMPLE_SVG


@pytest.mark.asyncio
async def test_fetch_json(make_fetcher):
    fetcher = make_fetcher(lambda request: json_response({"svg": "<svg/>"}))
    result = await fetcher.fetch(URL)
    assert result == JsonPayload({"svg": "<svg/>"})


@pytest.mark.asyncio
async def test_fetch_malformed_json(make_fetcher):
    fetcher = make_fetcher(
        lambda request: httpx.Response(200, text="{not json", headers={"content-type": "application/json"})
    )
    result = await fetcher.fetch(URL)
    assert isinstance(result, FetchFailure)
    assert result.kind == ErrorKind.PARSE_ERROR
    assert result.reason.startswith("Parse error: ")


@pytest.mark.asyncio
async def test_fetch_http_error_status(make_fetcher):
    fetcher = make_fetcher(lambda request: httpx.Response(503, text="down"))
    result = await fetcher.fetch(URL)
    assert result == FetchFailure(ErrorKind.NETWORK_ERROR, "Network error: 503")


@pytest.mark.asyncio
async def test_fetch_unsupported_content(make_fetcher):
    fetcher = make_fetcher(lambda request: httpx.Response(200, text="just words"))
    result = await fetcher.fetch(URL)
    assert result == FetchFailure(ErrorKind.UNSUPPORTED_CONTENT_TYPE, "Unsupported content type")


@pytest.mark.asyncio
async def test_fetch_transport_error_is_caught(make_fetcher):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = make_fetcher(handler)
    result = await fetcher.fetch(URL)
    assert result == FetchFailure(ErrorKind.NETWORK_ERROR, "Network error: connection refused")


@pytest.mark.asyncio
async def test_fetch_through_cors_relay(make_fetcher):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return svg_response(SIMPLE_SVG)

    relay_settings = Settings(cors_relay_url="https://relay.example.test/raw?url=")
    fetcher = make_fetcher(handler, fetch_settings=relay_settings)
    source = "https://graph.example.test/meteogram.svg?lat=59.9&lon=10.7"
    await fetcher.fetch(source)

    assert seen[0].host == "relay.example.test"
    assert seen[0].params["url"] == source


def test_extract_first_of_sibling_svgs():
    icon = '<svg xmlns="http://www.w3.org/2000/svg"><rect/></svg>'
    other = '<svg xmlns="http://www.w3.org/2000/svg"><circle/></svg>'
    assert extract_svg_markup(f"<div>{icon}<p>hello</p>{other}</div>") == icon


def test_extract_keeps_nested_svg_elements():
    graph = '<svg xmlns="http://www.w3.org/2000/svg"><svg x="16"><path/></svg><svg x="624"/><text>t</text></svg>'
    assert extract_svg_markup(f"<body>{graph}<svg><circle/></svg></body>") == graph


def test_extract_unclosed_svg_returns_none():
    assert extract_svg_markup("<p>x</p><svg><rect/>") is None


@pytest.mark.asyncio
async def test_fetch_malformed_url_is_failure(make_fetcher):
    fetcher = make_fetcher(lambda request: svg_response(SIMPLE_SVG))
    result = await fetcher.fetch("http://[::1")
    assert isinstance(result, FetchFailure)
    assert result.kind == ErrorKind.NETWORK_ERROR
    assert result.reason.startswith("Network error: ")


@pytest.mark.asyncio
async def test_fetch_deeply_nested_json_is_failure(make_fetcher):
    body = "[" * 100000 + "]" * 100000
    fetcher = make_fetcher(
        lambda request: httpx.Response(200, text=body, headers={"content-type": "application/json"})
    )
    result = await fetcher.fetch(URL)
    assert isinstance(result, FetchFailure)
    assert result.kind == ErrorKind.PARSE_ERROR
