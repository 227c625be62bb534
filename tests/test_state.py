import pytest

from news_portal.models import AggregationResult, Story, Video
from news_portal.state import PortalState


def _result(title, updated_at="2024-05-01T00:00:00.000Z", error=None):
    story = Story(id=title, title=title, summary="s", source="x", published_at="t", lang="en")
    return AggregationResult(stories=[story], updated_at=updated_at, ticker=title, error=error)


def test_latest_token_applies():
    state = PortalState()
    token = state.begin_news()

    assert state.snapshot().loading is True
    assert state.apply_news(token, _result("fresh")) is True

    snap = state.snapshot()
    assert [s.title for s in snap.stories] == ["fresh"]
    assert snap.ticker == "fresh"
    assert snap.loading is False


def test_stale_result_is_discarded():
    state = PortalState()
    old = state.begin_news()
    new = state.begin_news()

    assert state.apply_news(new, _result("new")) is True
    assert state.apply_news(old, _result("old")) is False
    assert [s.title for s in state.stories] == ["new"]


def test_failure_keeps_previous_updated_at():
    state = PortalState()
    state.apply_news(state.begin_news(), _result("ok", updated_at="2024-05-01T00:00:00.000Z"))

    state.apply_news(state.begin_news(), _result("demo", updated_at=None, error="down. Showing demo data."))

    snap = state.snapshot()
    assert snap.updated_at == "2024-05-01T00:00:00.000Z"
    assert snap.error == "down. Showing demo data."


def test_begin_clears_error():
    state = PortalState()
    state.apply_news(state.begin_news(), _result("demo", error="boom"))

    state.begin_news()

    assert state.error is None


def test_videos_replaced_and_none_ignored():
    state = PortalState()
    video = Video(id="a", title="A", link=None, published_at=None, thumbnail=None)
    state.apply_videos(state.begin_videos(), [video])

    assert state.apply_videos(state.begin_videos(), None) is False
    assert state.videos == [video]


def test_snapshot_is_a_copy():
    state = PortalState()
    state.apply_news(state.begin_news(), _result("a"))

    state.snapshot().stories.clear()

    assert len(state.stories) == 1


def test_unsupported_language_rejected():
    with pytest.raises(ValueError):
        PortalState("fr")
