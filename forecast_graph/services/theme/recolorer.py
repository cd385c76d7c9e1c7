"""Scoped theme stylesheet generation."""

from collections.abc import Iterable

from forecast_graph.config.constants import PipelineStep, log_pipeline_step
from forecast_graph.config.theme_rules import THEME_RULES, ThemeRule
from forecast_graph.config.widget_config import WidgetConfig


def _rule_prefix(rule: ThemeRule, scope: str) -> str:
    if rule.in_svg:
        return f".{scope} .svg-image-container svg "
    return f".{scope} "


def render_rule(rule: ThemeRule, config: WidgetConfig, scope: str) -> str:
    """Render one rule with every declaration marked !important."""
    values = config.model_dump()
    prefix = _rule_prefix(rule, scope)
    selector = ",\n".join(f"{prefix}{s}" for s in rule.selectors)
    body = " ".join(
        f"{prop}: {template.format_map(values)} !important;" for prop, template in rule.declarations
    )
    return f"{selector} {{ {body} }}"


def build_scoped_css(
    config: WidgetConfig,
    scope: str,
    rules: Iterable[ThemeRule] = THEME_RULES,
) -> str:
    """
    Build the recoloring stylesheet for one widget instance.

    Pure: bad color values end up as invalid CSS rather than errors.
    """
    log_pipeline_step(PipelineStep.RECOLOR)
    return "\n".join(render_rule(rule, config, scope) for rule in rules)


def build_chrome_css(config: WidgetConfig, scope: str) -> str:
    """Container, refresh button and svg sizing rules."""
    return f"""
.{scope} {{
  box-sizing: border-box; width: 100%; height: 100%;
  padding: {config.padding:g}px;
  display: flex; align-items: center; justify-content: center; overflow: hidden;
  background-color: {config.overall_background}; position: relative;
}}
.{scope} .svg-image-container {{
  width: 100%; height: 100%;
  display: flex; align-items: center; justify-content: center; overflow: hidden;
}}
.{scope} .refresh-button {{
  position: absolute; top: 12px; right: 12px;
  cursor: pointer; background: rgba(255,255,255,0.7);
  border-radius: 50%; padding: 2px; z-index: 10; line-height: 0; border: none;
  color: {config.refresh_icon_color};
}}
.{scope} .refresh-button svg path {{ stroke: currentColor !important; fill: none !important; }}
.{scope} .graph-error {{ padding: 4px 10px; text-align: center; color: red; }}
.{scope} .svg-image-container svg {{
  width: 100%; height: 100%; display: block;
  background-color: {config.overall_background} !important;
}}
"""
