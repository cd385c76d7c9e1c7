"""Graph widget instance: owned state, fetch path and teardown."""

import logging
import time
from collections.abc import Callable

from forecast_graph.config.constants import SCOPE_PREFIX
from forecast_graph.config.widget_config import WidgetConfig
from forecast_graph.infrastructure.logging.logger import StructuredLogger
from forecast_graph.orchestrator.render import render_widget
from forecast_graph.orchestrator.scheduler import RefreshScheduler
from forecast_graph.orchestrator.state import WidgetState
from forecast_graph.services.chart.synthesizer import synthesize_svg
from forecast_graph.services.errors import GraphPipelineError
from forecast_graph.services.fetch.fetcher import SvgFetcher
from forecast_graph.services.fetch.models import FetchFailure, FetchResult, JsonPayload
from forecast_graph.services.svg.normalizer import normalize_svg

logger = logging.getLogger(__name__)

SettingChangeCallback = Callable[[str, WidgetConfig], None]


class GraphWidget:
    """
    One themed forecast graph.

    The widget owns its display state, its last good SVG and its refresh
    timer; ``dispose`` releases all of them.

    A manual refresh racing a timer tick is not serialized: whichever
    response resolves last is displayed. Responses started under an older
    configuration, or arriving after ``dispose``, are discarded.
    """

    def __init__(
        self,
        widget_id: str,
        config: WidgetConfig,
        fetcher: SvgFetcher,
        on_setting_change: SettingChangeCallback | None = None,
    ):
        self.widget_id = widget_id
        self.config = config
        self.fetcher = fetcher
        self.state = WidgetState()
        self.scheduler = RefreshScheduler(name=f"widget-{widget_id}")
        self._on_setting_change = on_setting_change
        self._generation = 0
        self._disposed = False
        self._events = StructuredLogger(__name__)

    @property
    def scope(self) -> str:
        return f"{SCOPE_PREFIX}{self.widget_id}"

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Load the configured source and arm auto-refresh."""
        self._setup_auto_refresh()
        await self._handle_data_source_change()

    async def update_config(self, config: WidgetConfig) -> None:
        """Apply a configuration change from the host."""
        previous, self.config = self.config, config

        if config.fetch_settings_differ(previous):
            self._generation += 1
            self._setup_auto_refresh()
            await self._handle_data_source_change()
        elif not config.source_url and config.svg_code != previous.svg_code:
            await self._handle_data_source_change()
        elif config != previous and self.state.raw_svg:
            # Theme-only change; foreignObject backgrounds depend on config.
            self._apply_svg(self.state.raw_svg, keep_error=True)

    def dispose(self) -> None:
        """Cancel the timer and ignore any fetch still in flight."""
        self._disposed = True
        self._generation += 1
        self.scheduler.cancel()
        logger.info("Widget %s disposed", self.widget_id)

    async def refresh(self) -> None:
        """Re-fetch the source URL; used by both the timer and manual refresh."""
        if self._disposed or not self.config.source_url:
            return
        await self._fetch_from_url(self.config.source_url)

    def render(self) -> str:
        return render_widget(self.config, self.state, self.scope)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _setup_auto_refresh(self) -> None:
        self.scheduler.cancel()
        cfg = self.config
        if cfg.auto_refresh_enabled and cfg.refresh_interval > 0 and cfg.source_url:
            self.scheduler.arm(cfg.refresh_interval, self.refresh)

    async def _handle_data_source_change(self) -> None:
        if self.config.source_url:
            await self._fetch_from_url(self.config.source_url)
        elif self.config.has_inline_svg:
            self._apply_svg(self.config.svg_code)
        else:
            self.state = WidgetState()

    async def _fetch_from_url(self, url: str) -> None:
        generation = self._generation
        self.state.is_loading = True
        self.state.error = None
        start = time.perf_counter()

        result = await self.fetcher.fetch(url, self.config.api_token)

        if self._disposed or generation != self._generation:
            logger.info("Discarding stale response for widget %s", self.widget_id)
            return

        try:
            svg_text = self._resolve(result)
            self._process_svg(svg_text)
        except GraphPipelineError as e:
            self._fail(e)
            return

        self._events.log_step(
            "fetch",
            {"widget_id": self.widget_id, "source": type(result).__name__},
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        if svg_text.startswith("<svg"):
            self._write_back(svg_text)

    @staticmethod
    def _resolve(result: FetchResult) -> str:
        if isinstance(result, FetchFailure):
            raise GraphPipelineError(result.kind, result.reason)
        if isinstance(result, JsonPayload):
            return synthesize_svg(result.data).strip()
        return result.text

    def _process_svg(self, svg_code: str, keep_error: bool = False) -> None:
        normalized = normalize_svg(svg_code, self.config.overall_background)
        self.state.svg_html = normalized
        self.state.raw_svg = svg_code
        self.state.is_loading = False
        if not keep_error:
            self.state.error = None

    def _apply_svg(self, svg_code: str, keep_error: bool = False) -> None:
        try:
            self._process_svg(svg_code, keep_error=keep_error)
        except GraphPipelineError as e:
            logger.warning("Widget %s: %s", self.widget_id, e)
            self.state.error = str(e)
            self.state.is_loading = False

    def _fail(self, error: GraphPipelineError) -> None:
        self._events.log_error(
            "fetch",
            str(error),
            {"widget_id": self.widget_id, "kind": error.kind.value},
        )
        self.state.error = str(error)
        self.state.is_loading = False

        fallback = self.state.raw_svg or self.config.svg_code
        if fallback and fallback.strip().startswith("<svg"):
            try:
                self._process_svg(fallback, keep_error=True)
            except GraphPipelineError as e:
                logger.warning("Widget %s fallback unusable: %s", self.widget_id, e)

    def _write_back(self, svg_text: str) -> None:
        if svg_text == self.config.svg_code:
            return
        self.config = self.config.model_copy(update={"svg_code": svg_text})
        if self._on_setting_change is not None:
            self._on_setting_change(self.widget_id, self.config)
