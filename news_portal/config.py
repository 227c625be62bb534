"""Configuration utilities for the news portal."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .models import FeedSource

DEFAULT_RELAY_URL = "https://api.allorigins.win/get"
DEFAULT_SPEECH_DIR = Path(os.getenv("NEWS_PORTAL_SPEECH_DIR", "data/speech"))
SUPPORTED_LANGUAGES = ("en", "ta", "hi")

HEADLINES_URL = "https://gnews.io/api/v4/top-headlines"
HEADLINES_LIMIT = 10
VIDEO_FEED_URL = (
    "https://www.youtube.com/feeds/videos.xml?playlist_id=PLS3XGZxi7cBXNn3OZP8QIZK00ZzF6PMkY"
)
THUMBNAIL_TEMPLATE = "https://img.youtube.com/vi/{video_id}/0.jpg"


def rss_sources(language: str) -> List[FeedSource]:
    """Return the fixed fallback feeds, in the order their stories are shown."""

    return [
        FeedSource(name="BBC News", url="https://feeds.bbci.co.uk/news/rss.xml"),
        FeedSource(name="Google News", url=f"https://news.google.com/rss?hl={language}"),
        FeedSource(
            name="Times of India",
            url="https://timesofindia.indiatimes.com/rssfeeds/-2128936835.cms",
        ),
        FeedSource(name="The Hindu", url="https://www.thehindu.com/feeder/default.rss"),
    ]


@dataclass(frozen=True)
class Config:
    """Runtime configuration values for the portal."""

    relay_url: str = DEFAULT_RELAY_URL
    api_key: str = "demo"
    language: str = "en"
    country: str = "in"
    refresh_minutes: float = 60
    request_timeout: float = 10
    speech_dir: Path = DEFAULT_SPEECH_DIR

    def __post_init__(self) -> None:
        validate_language(self.language)
        if self.refresh_minutes <= 0:
            raise ValueError(f"refresh_minutes must be positive, got {self.refresh_minutes}")

    @property
    def refresh_seconds(self) -> float:
        return self.refresh_minutes * 60


def validate_language(language: str) -> str:
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(
            f"Unsupported language {language!r}; expected one of {', '.join(SUPPORTED_LANGUAGES)}"
        )
    return language


def load_config() -> Config:
    """Load configuration from environment variables and defaults."""

    return Config(
        relay_url=os.getenv("NEWS_PORTAL_RELAY_URL", DEFAULT_RELAY_URL),
        api_key=os.getenv("GNEWS_API_KEY", "demo"),
        language=os.getenv("NEWS_PORTAL_LANGUAGE", "en"),
        country=os.getenv("NEWS_PORTAL_COUNTRY", "in"),
        refresh_minutes=float(os.getenv("NEWS_PORTAL_REFRESH_MINUTES", "60")),
        request_timeout=float(os.getenv("NEWS_PORTAL_TIMEOUT", "10")),
        speech_dir=DEFAULT_SPEECH_DIR,
    )
