"""Hourly refresh loop driving the aggregator and the video fetcher."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

from .aggregator import NewsAggregator
from .fetchers import VideoFetcher
from .models import PortalSnapshot
from .state import PortalState

LOGGER = logging.getLogger(__name__)

UpdateCallback = Callable[[PortalSnapshot], None]


class RefreshScheduler:
    """Own the one recurring refresh timer.

    ``activate`` and ``set_language`` cancel the current timer before starting
    a new one, so at most one timer is ever live. Fetches already in flight
    are left to finish; :class:`PortalState` drops their results if they are stale.
    """

    def __init__(
        self,
        aggregator: NewsAggregator,
        videos: VideoFetcher,
        state: PortalState,
        interval_seconds: float = 3600.0,
        on_update: Optional[UpdateCallback] = None,
    ) -> None:
        self.aggregator = aggregator
        self.videos = videos
        self.state = state
        self.interval_seconds = interval_seconds
        self.on_update = on_update
        self._timer: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()

    @property
    def timer(self) -> Optional[asyncio.Task]:
        return self._timer

    @property
    def active(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def activate(self, language: Optional[str] = None) -> None:
        """Refresh immediately and (re)start the recurring timer. Needs a running loop."""

        self.stop()
        if language is not None:
            self.state.language = language
        LOGGER.info(
            "Activating refresh for %s every %.0f seconds", self.state.language, self.interval_seconds
        )
        self.refresh_all()
        self._timer = asyncio.create_task(self._tick())

    def set_language(self, language: str) -> None:
        self.activate(language)

    def stop(self) -> None:
        """Cancel the timer; safe to call any number of times."""

        if self._timer is not None:
            self._timer.cancel()
            LOGGER.debug("Refresh timer cancelled")
        self._timer = None

    def refresh_all(self) -> None:
        self._spawn(self._refresh_news(self.state.language))
        self._spawn(self._refresh_videos())

    def refresh_now(self) -> asyncio.Task:
        """Manual news refresh; the timer's schedule is untouched."""

        return self._spawn(self._refresh_news(self.state.language))

    async def wait_idle(self) -> None:
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            LOGGER.info("Scheduled refresh for %s", self.state.language)
            self.refresh_all()

    def _spawn(self, coro: Awaitable[None]) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _refresh_news(self, language: str) -> None:
        token = self.state.begin_news()
        result = await self.aggregator.run(language)
        if self.state.apply_news(token, result):
            self._notify()

    async def _refresh_videos(self) -> None:
        token = self.state.begin_videos()
        videos = await self.videos.fetch()
        if self.state.apply_videos(token, videos):
            self._notify()

    def _notify(self) -> None:
        if self.on_update is not None:
            self.on_update(self.state.snapshot())


__all__ = ["RefreshScheduler"]
