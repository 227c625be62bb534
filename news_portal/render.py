"""Markdown rendering of a portal snapshot."""

from __future__ import annotations

from typing import List, Optional

from dateutil import parser as date_parser

from .models import PortalSnapshot

TITLE = "AI Audio-Visual News (Live)"


def format_timestamp(value: Optional[str]) -> str:
    if not value:
        return "—"
    try:
        return date_parser.parse(value).strftime("%Y-%m-%d %H:%M")
    except (ValueError, TypeError, OverflowError):
        return value


def render_markdown(snapshot: PortalSnapshot) -> str:
    lines: List[str] = [f"# {TITLE}", ""]
    if snapshot.error:
        lines.extend([f"> {snapshot.error}", ""])
    lines.extend([f"**Breaking:** {snapshot.ticker or 'No breaking items'}", ""])

    for story in snapshot.stories:
        lines.append(f"## {story.title}")
        lines.append(f"*Source:* {story.source} — *Published:* {format_timestamp(story.published_at)}")
        lines.append("")
        if story.image_url:
            lines.extend([f"![]({story.image_url})", ""])
        lines.append(story.summary.strip())
        lines.append("")
        if story.url:
            lines.extend([f"[Read More]({story.url})", ""])

    if snapshot.videos:
        lines.extend(["## Live Video Updates", ""])
        for video in snapshot.videos:
            title = video.title or "Untitled video"
            lines.append(f"- [{title}]({video.link})" if video.link else f"- {title}")
        lines.append("")

    lines.append(f"*Last updated:* {format_timestamp(snapshot.updated_at)}")
    return "\n".join(lines).strip() + "\n"
