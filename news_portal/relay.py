"""Client for the CORS relay that all feeds are fetched through."""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote

import requests

from .config import Config
from .exceptions import FeedFetchError

LOGGER = logging.getLogger(__name__)


def build_relay_url(relay_url: str, target_url: str) -> str:
    """Embed ``target_url`` in the relay's ``?url=`` query parameter."""

    return f"{relay_url}?url={quote(target_url, safe='')}"


class RelayClient:
    """Fetch a target URL through the relay and unwrap its ``contents`` envelope."""

    def __init__(self, config: Config, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def get_contents(self, target_url: str) -> str:
        relay = build_relay_url(self.config.relay_url, target_url)
        try:
            response = self.session.get(relay, timeout=self.config.request_timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise FeedFetchError(f"Relay request failed for {target_url}: {exc}") from exc
        except ValueError as exc:
            raise FeedFetchError(f"Relay returned a non-JSON envelope for {target_url}") from exc

        contents = payload.get("contents") if isinstance(payload, dict) else None
        if not contents or not isinstance(contents, str):
            raise FeedFetchError(f"Relay returned an empty payload for {target_url}")
        LOGGER.debug("Relay delivered %d characters for %s", len(contents), target_url)
        return contents

    async def fetch_contents(self, target_url: str) -> str:
        """Async wrapper; the blocking request runs in the loop's executor."""

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.get_contents, target_url)
