"""High-level orchestration for one news refresh."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from .config import Config, rss_sources
from .exceptions import NoNewsDataError
from .fetchers import HeadlinesFetcher, RSSFeedFetcher
from .models import AggregationResult, FeedSource, RawArticle, Story, utc_now_iso
from .normalize import build_ticker, normalize_articles
from .relay import RelayClient

LOGGER = logging.getLogger(__name__)

FALLBACK_TITLE = "AI News Portal Fallback Active"
FALLBACK_SUMMARY = "Could not load live sources. Showing demo news."


def fallback_story(language: str) -> Story:
    return Story(
        id="demo-1",
        title=FALLBACK_TITLE,
        summary=FALLBACK_SUMMARY,
        source="System",
        published_at=utc_now_iso(),
        lang=language,
    )


class NewsAggregator:
    """Headlines API first, the fixed RSS feeds when it comes back empty.

    :meth:`run` never raises; a total failure becomes a single ``System``
    story plus an error message.
    """

    def __init__(
        self,
        config: Config,
        relay: Optional[RelayClient] = None,
        headlines: Optional[HeadlinesFetcher] = None,
        feeds: Optional[RSSFeedFetcher] = None,
    ) -> None:
        relay = relay or RelayClient(config)
        self.config = config
        self.headlines = headlines or HeadlinesFetcher(relay, config)
        self.feeds = feeds or RSSFeedFetcher(relay)

    async def run(self, language: str) -> AggregationResult:
        LOGGER.info("Starting news refresh for language %s", language)
        try:
            articles = await self.collect(language)
            if not articles:
                raise NoNewsDataError("No news data fetched")
            stories = normalize_articles(articles, language)
        except NoNewsDataError as exc:
            LOGGER.error("News refresh failed: %s", exc)
            return self._fallback(language, exc)
        except Exception as exc:
            LOGGER.exception("News refresh failed unexpectedly: %s", exc)
            return self._fallback(language, exc)

        LOGGER.info("News refresh produced %d stories", len(stories))
        return AggregationResult(
            stories=stories,
            updated_at=utc_now_iso(),
            ticker=build_ticker(stories),
        )

    async def collect(self, language: str) -> List[RawArticle]:
        articles = await self.headlines.fetch(language)
        if articles:
            return articles
        return await self.collect_feeds(rss_sources(language))

    async def collect_feeds(self, sources: Sequence[FeedSource]) -> List[RawArticle]:
        """Fetch every source concurrently; results keep the order of ``sources``."""

        results = await asyncio.gather(
            *(self.feeds.fetch(source.url, source.name) for source in sources)
        )
        aggregated: List[RawArticle] = []
        for source, items in zip(sources, results):
            LOGGER.debug("Source %s contributed %d items", source.name, len(items))
            aggregated.extend(items)
        LOGGER.info("Collected %d items from %d feeds", len(aggregated), len(sources))
        return aggregated

    @staticmethod
    def _fallback(language: str, exc: Exception) -> AggregationResult:
        story = fallback_story(language)
        return AggregationResult(
            stories=[story],
            updated_at=None,
            ticker=build_ticker([story]),
            error=f"{exc}. Showing demo data.",
        )
