import asyncio

import pytest

from app.core.config import RankingSettings
from app.core.exceptions import InvalidArgument, NotFound
from app.ranking.cache import EngagementCache
from app.ranking.ranker import FeedRanker
from app.ranking.records import ViewerContext, Visibility
from app.services.feed_service import FeedService
from app.services.interaction_service import InteractionService

from fakes import NOW, InMemorySocialGraph, InMemoryVideoStore, make_video


@pytest.fixture()
def store():
    return InMemoryVideoStore(
        [
            make_video("bob-1", author_id="bob", like_count=1),
            make_video("carol-1", author_id="carol", like_count=100),
            make_video("carol-draft", author_id="carol", like_count=500, visibility=Visibility.PRIVATE),
        ]
    )


@pytest.fixture()
def graph():
    return InMemorySocialGraph({"alice": {"bob"}})


@pytest.fixture()
def service(store, graph):
    return FeedService(store, graph, FeedRanker(RankingSettings()), clock=lambda: NOW)


def test_feed_for_follower_puts_followed_author_first(service):
    items = asyncio.run(service.get_feed("alice", page=1, page_size=10))
    assert [item.id for item in items] == ["bob-1", "carol-1"]


def test_anonymous_feed_skips_graph_lookup(service, graph):
    items = asyncio.run(service.get_feed(None, page=1, page_size=10))
    assert [item.id for item in items] == ["carol-1", "bob-1"]
    assert graph.lookups == []


def test_summaries_expose_counts_but_not_scores(service):
    item = asyncio.run(service.get_feed(None, page=1, page_size=1))[0]
    payload = item.model_dump()
    assert payload["like_count"] == 100
    assert "score" not in payload
    assert "visibility" not in payload


def test_bad_paging_is_rejected_before_loading(service, store):
    with pytest.raises(InvalidArgument):
        asyncio.run(service.get_feed("alice", page=0, page_size=10))
    assert store.list_calls == 0


def test_feed_does_not_record_views(service, store):
    asyncio.run(service.get_feed("alice", page=1, page_size=10))
    assert all(video.view_count == 0 for video in store.videos.values())


def test_trending(service):
    items = asyncio.run(service.get_trending(limit=5))
    assert [item.id for item in items] == ["carol-1", "bob-1"]


def test_profile_listing_shows_private_only_to_author(service):
    own = asyncio.run(service.get_profile_videos("carol", viewer_id="carol"))
    other = asyncio.run(service.get_profile_videos("carol", viewer_id="alice"))
    anonymous = asyncio.run(service.get_profile_videos("carol", viewer_id=None))

    assert {item.id for item in own} == {"carol-1", "carol-draft"}
    assert [item.id for item in other] == ["carol-1"]
    assert [item.id for item in anonymous] == ["carol-1"]


def test_interaction_increments_and_invalidates_cache(store):
    cache = EngagementCache()
    ranker = FeedRanker(RankingSettings(), cache=cache)
    ranker.rank(list(store.videos.values()), ViewerContext(), NOW, page=1, page_size=10)
    assert "bob-1" in cache

    video = asyncio.run(InteractionService(store, cache).record("bob-1", "like"))

    assert video.like_count == 2
    assert "bob-1" not in cache
    assert "carol-1" in cache


def test_interaction_on_unknown_video(store):
    with pytest.raises(NotFound):
        asyncio.run(InteractionService(store).record("nope", "view"))


def test_unknown_interaction_kind(store):
    with pytest.raises(InvalidArgument):
        asyncio.run(InteractionService(store).record("bob-1", "dislike"))
