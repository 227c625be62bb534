"""Turn raw fetcher output into display-ready stories.

Default table applied by :func:`normalize_article`:

============  ==========================================================
field         value when the upstream value is missing or blank
============  ==========================================================
id            url, else the fetcher's ``source-index`` id, else
              ``"<source>-<batch index>"``
title         ``"Untitled"``
summary       description, else content, else
              ``"No description available."``
source        ``"Internet"``
published_at  the current UTC time
image_url     ``image``, else ``urlToImage``, else ``None``
============  ==========================================================
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .models import RawArticle, Story, utc_now_iso

DEFAULT_TITLE = "Untitled"
DEFAULT_SUMMARY = "No description available."
DEFAULT_SOURCE = "Internet"
TICKER_SEPARATOR = "  •  "
TICKER_SIZE = 5


def _first(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value and value.strip():
            return value.strip()
    return None


def normalize_article(raw: RawArticle, index: int, language: str) -> Story:
    source = _first(raw.source_name) or DEFAULT_SOURCE
    url = _first(raw.url)
    return Story(
        id=url or _first(raw.id) or f"{source}-{index}",
        title=_first(raw.title) or DEFAULT_TITLE,
        summary=_first(raw.description, raw.content) or DEFAULT_SUMMARY,
        source=source,
        published_at=_first(raw.published_at) or utc_now_iso(),
        lang=language,
        url=url,
        image_url=_first(raw.image, raw.url_to_image),
    )


def normalize_articles(articles: Iterable[RawArticle], language: str) -> List[Story]:
    return [normalize_article(raw, index, language) for index, raw in enumerate(articles)]


def build_ticker(stories: Iterable[Story]) -> str:
    """Join the first few titles, in order, into a single ticker line."""

    titles = [story.title for story in stories][:TICKER_SIZE]
    return TICKER_SEPARATOR.join(titles)
