"""Widget markup assembly."""

from html import escape

from forecast_graph.config.constants import MSG_NOT_CONFIGURED, PipelineStep, log_pipeline_step
from forecast_graph.config.widget_config import WidgetConfig
from forecast_graph.orchestrator.state import WidgetState
from forecast_graph.services.theme.recolorer import build_chrome_css, build_scoped_css

_REFRESH_BUTTON = (
    '<button class="refresh-button" title="Refresh graph" aria-label="Refresh graph">'
    '<svg viewBox="0 0 24 24" width="14" height="14" role="img" aria-hidden="true">'
    '<path stroke-width="2" stroke-linecap="round" stroke-linejoin="round" '
    'd="M21 12a9 9 0 1 1-3.4-7L21 8m0-4v4h-4"/></svg></button>'
)


def render_widget(config: WidgetConfig, state: WidgetState, scope: str) -> str:
    """
    Build the markup for one widget instance.

    The stylesheet is derived from the config on every render, so theme
    changes never require re-fetching the graph.
    """
    log_pipeline_step(PipelineStep.RENDER)
    if state.is_loading:
        return '<div class="loading">Loading…</div>'

    error_html = ""
    if state.error:
        error_html = f'<div class="graph-error">{escape(state.error)}</div>'
        if not state.svg_html:
            return f'<div style="padding: 10px; text-align: center; color: red;">{escape(state.error)}</div>'

    css = build_chrome_css(config, scope) + build_scoped_css(config, scope)
    parts = [f'<div class="{escape(scope)}">', f"<style>{css}</style>"]
    if config.source_url:
        parts.append(_REFRESH_BUTTON)
    parts.append(error_html)
    if state.svg_html:
        parts.append(f'<div class="svg-image-container">{state.svg_html}</div>')
    else:
        parts.append(f'<div style="padding: 10px; text-align: center;">{MSG_NOT_CONFIGURED}</div>')
    parts.append("</div>")
    return "".join(parts)
