"""Shared dataclasses and type definitions for the portal."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string with a ``Z`` suffix."""

    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class FeedSource:
    name: str
    url: str


@dataclass
class RawArticle:
    """Unnormalized article as produced by a fetcher; any field may be missing."""

    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    published_at: Optional[str] = None
    image: Optional[str] = None
    url_to_image: Optional[str] = None
    source_name: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "RawArticle":
        """Build a raw article from a headlines API ``articles`` entry."""

        source = item.get("source")
        return cls(
            title=item.get("title"),
            description=item.get("description"),
            content=item.get("content"),
            url=item.get("url"),
            published_at=item.get("publishedAt"),
            image=item.get("image"),
            url_to_image=item.get("urlToImage"),
            source_name=source.get("name") if isinstance(source, dict) else None,
        )


@dataclass(frozen=True)
class Story:
    """Normalized news item ready for display."""

    id: str
    title: str
    summary: str
    source: str
    published_at: str
    lang: str
    url: Optional[str] = None
    image_url: Optional[str] = None

    def speech_text(self) -> str:
        return self.summary or self.title


@dataclass(frozen=True)
class Video:
    id: str
    title: Optional[str]
    link: Optional[str]
    published_at: Optional[str]
    thumbnail: Optional[str]


@dataclass
class AggregationResult:
    stories: List[Story]
    updated_at: Optional[str]
    ticker: str
    error: Optional[str] = None


@dataclass
class PortalSnapshot:
    """Everything the view layer consumes."""

    language: str
    stories: List[Story] = field(default_factory=list)
    videos: List[Video] = field(default_factory=list)
    updated_at: Optional[str] = None
    error: Optional[str] = None
    ticker: str = ""
    loading: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
