"""Relay-backed fetchers for the headlines API, RSS feeds and the video playlist."""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional
from urllib.parse import urlencode
from xml.sax import SAXException

import feedparser
from bs4 import BeautifulSoup

from .config import (
    HEADLINES_LIMIT,
    HEADLINES_URL,
    THUMBNAIL_TEMPLATE,
    VIDEO_FEED_URL,
    Config,
)
from .exceptions import FeedFetchError, FeedParseError
from .models import RawArticle, Video
from .relay import RelayClient

LOGGER = logging.getLogger(__name__)

MAX_FEED_ITEMS = 10
MAX_VIDEOS = 6


def parse_feed_document(contents: str, label: str) -> feedparser.FeedParserDict:
    """Parse relayed XML text, raising FeedParseError when it is not well-formed."""

    parsed = feedparser.parse(contents.encode("utf-8", errors="replace"))
    if parsed.bozo:
        exc = parsed.get("bozo_exception")
        if isinstance(exc, SAXException) or not parsed.entries:
            raise FeedParseError(f"Malformed feed document from {label}: {exc}")
    return parsed


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _plain_text(html: Optional[str]) -> Optional[str]:
    if html is None:
        return None
    return BeautifulSoup(html, "html.parser").get_text(" ", strip=True)


class RSSFeedFetcher:
    """Fetch one RSS feed through the relay.

    Failures of any kind degrade to an empty list; they are logged, never raised.
    """

    def __init__(self, relay: RelayClient, max_items: int = MAX_FEED_ITEMS) -> None:
        self.relay = relay
        self.max_items = max_items

    async def fetch(self, feed_url: str, source_label: str) -> List[RawArticle]:
        try:
            contents = await self.relay.fetch_contents(feed_url)
            parsed = parse_feed_document(contents, source_label)
            return self._to_articles(parsed, source_label)
        except (FeedFetchError, FeedParseError) as exc:
            LOGGER.error("Failed to fetch %s: %s", source_label, exc)
            return []
        except Exception as exc:
            LOGGER.exception("Feed %s failed unexpectedly: %s", source_label, exc)
            return []

    def _to_articles(self, parsed: feedparser.FeedParserDict, source_label: str) -> List[RawArticle]:
        if not parsed.get("version", "").startswith("rss"):
            LOGGER.warning("%s is not an RSS feed (%s)", source_label, parsed.get("version") or "unknown")
            return []

        articles: List[RawArticle] = []
        for index, entry in enumerate(parsed.entries[: self.max_items]):
            # feedparser promotes a permalink <guid> to ``link``; only a real <link> counts
            url = _text(entry.get("link"))
            if entry.get("guidislink") and url == entry.get("id"):
                url = None
            articles.append(
                RawArticle(
                    id=f"{source_label}-{index}",
                    title=_text(entry.get("title")),
                    description=_plain_text(_text(entry.get("description"))),
                    url=url,
                    published_at=_text(entry.get("published")),
                    source_name=source_label,
                )
            )
        LOGGER.info("Fetched %d items from %s", len(articles), source_label)
        return articles


class HeadlinesFetcher:
    """Top-headlines JSON API, relayed; its ``contents`` is itself a JSON string."""

    def __init__(self, relay: RelayClient, config: Config) -> None:
        self.relay = relay
        self.config = config

    def url_for(self, language: str) -> str:
        params = {
            "lang": language,
            "country": self.config.country,
            "max": HEADLINES_LIMIT,
            "apikey": self.config.api_key,
        }
        return f"{HEADLINES_URL}?{urlencode(params)}"

    async def fetch(self, language: str) -> List[RawArticle]:
        try:
            contents = await self.relay.fetch_contents(self.url_for(language))
            payload = json.loads(contents)
        except (FeedFetchError, ValueError) as exc:
            LOGGER.warning("Headlines API failed, trying RSS feeds: %s", exc)
            return []

        items = payload.get("articles") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            LOGGER.warning("Headlines API returned no articles list, trying RSS feeds")
            return []

        articles = [RawArticle.from_api(item) for item in items if isinstance(item, dict)]
        LOGGER.info("Fetched %d articles from the headlines API", len(articles))
        return articles


class VideoFetcher:
    """Fetch the fixed video playlist feed.

    Returns ``None`` on failure so the caller keeps whatever videos it already has.
    """

    def __init__(self, relay: RelayClient, feed_url: str = VIDEO_FEED_URL) -> None:
        self.relay = relay
        self.feed_url = feed_url

    async def fetch(self) -> Optional[List[Video]]:
        try:
            contents = await self.relay.fetch_contents(self.feed_url)
            parsed = parse_feed_document(contents, "video feed")
            videos = [self._to_video(index, entry) for index, entry in enumerate(parsed.entries[:MAX_VIDEOS])]
        except (FeedFetchError, FeedParseError) as exc:
            LOGGER.error("Video fetch failed: %s", exc)
            return None
        except Exception as exc:
            LOGGER.exception("Video fetch failed unexpectedly: %s", exc)
            return None

        LOGGER.info("Fetched %d videos", len(videos))
        return videos

    @staticmethod
    def _to_video(index: int, entry: feedparser.FeedParserDict) -> Video:
        video_id = _text(entry.get("yt_videoid"))
        if not video_id:
            LOGGER.debug("Video entry %d has no id; omitting thumbnail", index)
        return Video(
            id=video_id or str(index),
            title=_text(entry.get("title")),
            link=_text(entry.get("link")),
            published_at=_text(entry.get("published")),
            thumbnail=THUMBNAIL_TEMPLATE.format(video_id=video_id) if video_id else None,
        )
