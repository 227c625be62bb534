"""In-memory portal state with stale-result protection."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from .config import validate_language
from .models import AggregationResult, PortalSnapshot, Story, Video

LOGGER = logging.getLogger(__name__)


class PortalState:
    """Single owner of everything the view shows.

    Each refresh takes a token from ``begin_*`` and hands it back with its
    result. Only the most recently issued token may apply, so a slow fetch that
    finishes after a newer one started is discarded instead of overwriting it.
    """

    def __init__(self, language: str = "en") -> None:
        self._snapshot = PortalSnapshot(language=validate_language(language))
        self._news_token = 0
        self._video_token = 0

    @property
    def language(self) -> str:
        return self._snapshot.language

    @language.setter
    def language(self, value: str) -> None:
        self._snapshot.language = validate_language(value)

    @property
    def stories(self) -> List[Story]:
        return self._snapshot.stories

    @property
    def videos(self) -> List[Video]:
        return self._snapshot.videos

    @property
    def error(self) -> Optional[str]:
        return self._snapshot.error

    def snapshot(self) -> PortalSnapshot:
        return replace(
            self._snapshot,
            stories=list(self._snapshot.stories),
            videos=list(self._snapshot.videos),
        )

    def begin_news(self) -> int:
        self._news_token += 1
        self._snapshot.loading = True
        self._snapshot.error = None
        return self._news_token

    def apply_news(self, token: int, result: AggregationResult) -> bool:
        if token != self._news_token:
            LOGGER.debug("Discarding stale news result %d (latest is %d)", token, self._news_token)
            return False
        self._snapshot.stories = list(result.stories)
        self._snapshot.ticker = result.ticker
        self._snapshot.error = result.error
        if result.updated_at:
            self._snapshot.updated_at = result.updated_at
        self._snapshot.loading = False
        return True

    def begin_videos(self) -> int:
        self._video_token += 1
        return self._video_token

    def apply_videos(self, token: int, videos: Optional[List[Video]]) -> bool:
        if token != self._video_token:
            LOGGER.debug("Discarding stale video result %d (latest is %d)", token, self._video_token)
            return False
        if videos is None:
            return False
        self._snapshot.videos = list(videos)
        return True


__all__ = ["PortalState"]
