"""Command-line entry point for the news portal."""

from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import replace
from pathlib import Path

from .aggregator import NewsAggregator
from .config import SUPPORTED_LANGUAGES, Config, load_config
from .exceptions import SpeechSynthesisError, SpeechUnavailableError
from .fetchers import VideoFetcher
from .models import PortalSnapshot
from .relay import RelayClient
from .render import render_markdown
from .scheduler import RefreshScheduler
from .speech import Speaker
from .state import PortalState

LOGGER = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch live news and videos into a markdown view")
    parser.add_argument("--language", choices=SUPPORTED_LANGUAGES, help="Language tag for headlines")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--output", type=Path, help="Also write the rendered view to this path")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep refreshing on the configured interval until interrupted",
    )
    parser.add_argument("--speak", type=int, metavar="INDEX", help="Read the story at INDEX aloud")
    return parser.parse_args()


def build_scheduler(
    config: Config,
    state: PortalState,
    output: Path | None = None,
    echo: bool = False,
) -> RefreshScheduler:
    relay = RelayClient(config)

    def publish(snapshot: PortalSnapshot) -> None:
        text = render_markdown(snapshot)
        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(text, encoding="utf-8")
        if echo:
            print(text)

    return RefreshScheduler(
        NewsAggregator(config, relay),
        VideoFetcher(relay),
        state,
        interval_seconds=config.refresh_seconds,
        on_update=publish,
    )


async def speak_story(config: Config, state: PortalState, index: int) -> None:
    stories = state.stories
    if not 0 <= index < len(stories):
        print(f"No story at index {index}; {len(stories)} available.")
        return
    speaker = Speaker(config.speech_dir)
    try:
        task = speaker.speak(stories[index].speech_text(), state.language)
    except SpeechUnavailableError as exc:
        LOGGER.warning("Speech unavailable: %s", exc)
        print(f"Notice: {exc}")
        return
    if task is None:
        return
    try:
        path = await task
    except SpeechSynthesisError as exc:
        LOGGER.error("Speech failed: %s", exc)
        print(f"Notice: {exc}")
        return
    print(f"Speech saved to {path}")


async def run(config: Config, args: argparse.Namespace) -> None:
    state = PortalState(config.language)
    scheduler = build_scheduler(config, state, args.output, echo=args.watch)
    scheduler.activate()
    try:
        await scheduler.wait_idle()
        if not args.watch:
            print(render_markdown(state.snapshot()))
        if args.speak is not None:
            await speak_story(config, state, args.speak)
        if args.watch:
            await asyncio.Event().wait()
    finally:
        scheduler.stop()


def main() -> None:
    args = parse_args()
    setup_logging(verbose=args.verbose)

    config = load_config()
    if args.language:
        config = replace(config, language=args.language)
    try:
        asyncio.run(run(config, args))
    except KeyboardInterrupt:
        LOGGER.info("Stopped")


if __name__ == "__main__":
    main()
