"""Tests for widget and process configuration."""

import pytest
from pydantic import ValidationError

from forecast_graph.config.settings import Settings
from forecast_graph.config.widget_config import WidgetConfig


def test_camel_case_aliases_accepted():
    config = WidgetConfig.model_validate(
        {"sourceUrl": "https://x.test/a.svg", "refreshInterval": 60000, "yAxisIconColor": "#123456"}
    )
    assert config.source_url == "https://x.test/a.svg"
    assert config.refresh_interval == 60000
    assert config.y_axis_icon_color == "#123456"


def test_dump_uses_wire_names():
    dumped = WidgetConfig(svg_code="<svg/>").model_dump(by_alias=True)
    assert dumped["svgCode"] == "<svg/>"
    assert "svg_code" not in dumped


def test_config_is_immutable():
    config = WidgetConfig()
    with pytest.raises(ValidationError):
        config.source_url = "https://x.test"


def test_negative_interval_rejected():
    with pytest.raises(ValidationError):
        WidgetConfig(refresh_interval=-1)


@pytest.mark.parametrize(
    "code,expected",
    [("<svg/>", True), ("  <!-- paste SVG here -->", False), ("", False), ("   ", False)],
)
def test_inline_svg_placeholder(code, expected):
    assert WidgetConfig(svg_code=code).has_inline_svg is expected


def test_fetch_settings_differ():
    base = WidgetConfig(source_url="https://x.test", refresh_interval=1000)
    assert base.fetch_settings_differ(base.model_copy(update={"refresh_interval": 2000}))
    assert base.fetch_settings_differ(base.model_copy(update={"auto_refresh_enabled": False}))
    assert not base.fetch_settings_differ(base.model_copy(update={"main_text_color": "#000"}))


def test_settings_log_level_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_settings_rejects_bad_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")


def test_settings_rejects_non_positive_timeout():
    with pytest.raises(ValidationError):
        Settings(http_timeout=0)
