"""Shared fixtures: configs, fake relays and feed documents."""

from __future__ import annotations

from typing import Dict, Iterable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from news_portal.config import Config


def rss_document(items: Iterable[Dict[str, str]]) -> str:
    """Build an RSS 2.0 document; each dict maps child element name to text."""

    rendered = []
    for item in items:
        children = "".join(f"<{name}>{value}</{name}>" for name, value in item.items())
        rendered.append(f"<item>{children}</item>")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel><title>Test</title><link>https://example.com</link>'
        "<description>Test feed</description>"
        f"{''.join(rendered)}</channel></rss>"
    )


def video_document(entries: Iterable[Dict[str, Optional[str]]]) -> str:
    rendered = []
    for entry in entries:
        parts = []
        if entry.get("video_id"):
            parts.append(f"<yt:videoId>{entry['video_id']}</yt:videoId>")
        parts.append(f"<title>{entry.get('title', 'Video')}</title>")
        parts.append(f'<link rel="alternate" href="{entry.get("link", "https://youtube.com/watch")}"/>')
        parts.append(f"<published>{entry.get('published', '2024-05-01T10:00:00+00:00')}</published>")
        parts.append("<id>tag:youtube.com,2008:video</id>")
        rendered.append(f"<entry>{''.join(parts)}</entry>")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<feed xmlns:yt="http://www.youtube.com/xml/schemas/2015" '
        'xmlns="http://www.w3.org/2005/Atom">'
        "<title>Playlist</title>"
        f"{''.join(rendered)}</feed>"
    )


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(relay_url="https://relay.test/get", api_key="key", speech_dir=tmp_path / "speech")


@pytest.fixture
def relay() -> MagicMock:
    """A RelayClient stand-in whose ``fetch_contents`` is an AsyncMock."""

    mock = MagicMock()
    mock.fetch_contents = AsyncMock()
    return mock


@pytest.fixture
def rss_doc():
    return rss_document


@pytest.fixture
def video_doc():
    return video_document
