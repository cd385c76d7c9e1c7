"""In-memory registry of widget instances."""

import logging

from fastapi import HTTPException

from forecast_graph.config.settings import Settings
from forecast_graph.config.widget_config import WidgetConfig
from forecast_graph.orchestrator.widget import GraphWidget
from forecast_graph.services.fetch.fetcher import SvgFetcher

logger = logging.getLogger(__name__)


class WidgetRegistry:
    """Owns widget instances and the fetcher they share.

    Stands in for the dashboard host: it creates, reconfigures and tears down
    widgets, and records the config each widget writes back.
    """

    def __init__(self, settings: Settings, fetcher: SvgFetcher | None = None) -> None:
        self.settings = settings
        self.fetcher = fetcher or SvgFetcher(settings)
        self._widgets: dict[str, GraphWidget] = {}
        self._configs: dict[str, WidgetConfig] = {}

    def __contains__(self, widget_id: str) -> bool:
        return widget_id in self._widgets

    def __len__(self) -> int:
        return len(self._widgets)

    def get(self, widget_id: str) -> GraphWidget:
        """Return a widget or raise 404."""
        widget = self._widgets.get(widget_id)
        if widget is None:
            raise HTTPException(status_code=404, detail=f"Widget '{widget_id}' not found")
        return widget

    def stored_config(self, widget_id: str) -> WidgetConfig:
        return self._configs.get(widget_id) or self.get(widget_id).config

    def _on_setting_change(self, widget_id: str, config: WidgetConfig) -> None:
        self._configs[widget_id] = config
        logger.info("Widget %s wrote back svg_code (%d chars)", widget_id, len(config.svg_code))

    async def configure(self, widget_id: str, config: WidgetConfig) -> GraphWidget:
        """Create the widget or apply a new configuration to it."""
        self._configs[widget_id] = config
        widget = self._widgets.get(widget_id)
        if widget is None:
            widget = GraphWidget(widget_id, config, self.fetcher, self._on_setting_change)
            self._widgets[widget_id] = widget
            logger.info("Widget %s created", widget_id)
            await widget.start()
        else:
            await widget.update_config(config)
        return widget

    def remove(self, widget_id: str) -> None:
        widget = self.get(widget_id)
        widget.dispose()
        del self._widgets[widget_id]
        self._configs.pop(widget_id, None)

    async def close(self) -> None:
        """Dispose every widget and close the shared HTTP client."""
        for widget in self._widgets.values():
            widget.dispose()
        self._widgets.clear()
        self._configs.clear()
        await self.fetcher.aclose()
