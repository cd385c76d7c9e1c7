"""Single repeating refresh timer."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

RefreshCallback = Callable[[], Awaitable[None]]


class RefreshScheduler:
    """Keeps at most one repeating timer alive.

    ``arm`` always cancels the running timer before starting a new one, so
    repeated reconfiguration never leaves orphaned timers behind.
    """

    def __init__(self, name: str = "refresh") -> None:
        self.name = name
        self._task: asyncio.Task[None] | None = None
        self._interval_ms: int = 0

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval_ms(self) -> int:
        return self._interval_ms if self.is_active else 0

    def arm(self, interval_ms: int, callback: RefreshCallback) -> None:
        """Replace any running timer with one firing every ``interval_ms``."""
        self.cancel()
        if interval_ms <= 0:
            return
        self._interval_ms = interval_ms
        self._task = asyncio.get_running_loop().create_task(
            self._run(interval_ms / 1000, callback),
            name=f"{self.name}-timer",
        )
        logger.debug("Timer %s armed every %d ms", self.name, interval_ms)

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Timer %s cancelled", self.name)
        self._task = None
        self._interval_ms = 0

    async def _run(self, interval_s: float, callback: RefreshCallback) -> None:
        while True:
            await asyncio.sleep(interval_s)
            try:
                await callback()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("Timer %s callback failed: %s", self.name, e, exc_info=True)
