"""Tests for the CORS relay."""

import httpx
import pytest
from fastapi.testclient import TestClient

from forecast_graph.api.dependencies import get_settings_dependency
from forecast_graph.api.routers.relay import get_relay_client
from forecast_graph.config.settings import Settings
from forecast_graph.proxy_app import app

RELAY_PATH = "/v2/geodata/waveforecast/fairway"


class Upstream:
    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error:
            raise self.error
        return httpx.Response(
            200,
            content=b'{"properties": {"timeseries": []}}',
            headers={"content-type": "application/json; charset=utf-8"},
        )


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def client(upstream):
    """Relay test client with a mocked upstream and a known token."""
    relay_settings = Settings(barentswatch_token="secret")
    app.dependency_overrides[get_settings_dependency] = lambda: relay_settings
    app.dependency_overrides[get_relay_client] = lambda: httpx.AsyncClient(
        transport=httpx.MockTransport(upstream)
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_forwards_query_and_token(client, upstream):
    response = client.get(f"{RELAY_PATH}?fairwayid=12")
    assert response.status_code == 200
    assert response.json() == {"properties": {"timeseries": []}}

    sent = upstream.requests[0]
    assert str(sent.url) == "https://www.barentswatch.no/bwapi/v2/geodata/waveforecast/fairway?fairwayid=12"
    assert sent.headers["authorization"] == "Bearer secret"


def test_mirrors_content_type_and_allows_any_origin(client):
    response = client.get(RELAY_PATH)
    assert response.headers["content-type"] == "application/json; charset=utf-8"
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
def test_non_get_is_refused(client, upstream, method):
    response = client.request(method, RELAY_PATH)
    assert response.status_code == 405
    assert response.text == "Method Not Allowed"
    assert response.headers["access-control-allow-origin"] == "*"
    assert upstream.requests == []


def test_other_paths_not_found(client, upstream):
    response = client.get("/v2/geodata/something-else")
    assert response.status_code == 404
    assert response.text == "Not Found"
    assert upstream.requests == []


def test_upstream_failure_returns_json_error(client, upstream):
    upstream.error = httpx.ConnectError("connection refused")
    response = client.get(RELAY_PATH)
    assert response.status_code == 500
    assert response.json() == {"error": "connection refused"}
    assert response.headers["access-control-allow-origin"] == "*"
