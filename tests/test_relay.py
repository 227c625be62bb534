"""Tests for the relay client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from news_portal.exceptions import FeedFetchError
from news_portal.relay import RelayClient, build_relay_url


def _session(payload=None, exc=None):
    session = MagicMock()
    if exc is not None:
        session.get.side_effect = exc
    else:
        response = MagicMock()
        response.json.return_value = payload
        session.get.return_value = response
    return session


def test_target_is_fully_url_encoded():
    url = build_relay_url("https://relay.test/get", "https://news.google.com/rss?hl=en&x=1")

    assert url == "https://relay.test/get?url=https%3A%2F%2Fnews.google.com%2Frss%3Fhl%3Den%26x%3D1"


def test_contents_are_unwrapped(config):
    session = _session({"contents": "<rss/>", "status": {"http_code": 200}})

    assert RelayClient(config, session).get_contents("https://a.test/feed") == "<rss/>"
    session.get.assert_called_once_with(
        "https://relay.test/get?url=https%3A%2F%2Fa.test%2Ffeed", timeout=config.request_timeout
    )


@pytest.mark.parametrize("payload", [{"contents": ""}, {"contents": None}, {}, ["not", "a", "dict"]])
def test_empty_payload_raises(config, payload):
    with pytest.raises(FeedFetchError):
        RelayClient(config, _session(payload)).get_contents("https://a.test/feed")


def test_transport_error_raises(config):
    session = _session(exc=requests.ConnectionError("refused"))

    with pytest.raises(FeedFetchError, match="Relay request failed"):
        RelayClient(config, session).get_contents("https://a.test/feed")


def test_non_json_envelope_raises(config):
    session = _session()
    session.get.return_value.json.side_effect = ValueError("Expecting value")

    with pytest.raises(FeedFetchError, match="non-JSON"):
        RelayClient(config, session).get_contents("https://a.test/feed")


@pytest.mark.asyncio
async def test_fetch_contents_runs_blocking_call(config):
    client = RelayClient(config, _session())
    with patch.object(client, "get_contents", return_value="<rss/>") as get_contents:
        assert await client.fetch_contents("https://a.test/feed") == "<rss/>"
    get_contents.assert_called_once_with("https://a.test/feed")
