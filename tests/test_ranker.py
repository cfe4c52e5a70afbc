import random

import pytest

from app.core.config import RankingSettings
from app.core.exceptions import InvalidArgument, ValidationError
from app.ranking.cache import EngagementCache
from app.ranking.ranker import FeedRanker
from app.ranking.records import VideoRecord, ViewerContext, Visibility

from fakes import NOW, make_video


@pytest.fixture()
def ranker():
    return FeedRanker(RankingSettings())


def ids(videos):
    return [video.id for video in videos]


def mixed_pool(size=23, seed=7):
    rng = random.Random(seed)
    return [
        make_video(
            f"v{i:02d}",
            age_hours=rng.randint(0, 72),
            author_id=rng.choice(["bob", "carol", "dave"]),
            like_count=rng.randint(0, 50),
            comment_count=rng.randint(0, 10),
            share_count=rng.randint(0, 5),
            view_count=rng.randint(0, 1000),
        )
        for i in range(size)
    ]


def test_example_scenario(ranker):
    viewer = ViewerContext(viewer_id="alice", following=frozenset({"followed"}))
    a = make_video("A", age_hours=1, author_id="followed", like_count=10)
    b = make_video("B", age_hours=1, author_id="stranger")
    c = make_video("C", age_hours=1, author_id="stranger", like_count=100)

    assert ranker.score(a, viewer, NOW) == pytest.approx(1010)
    assert ranker.score(c, viewer, NOW) == pytest.approx(100)
    assert ranker.score(b, viewer, NOW) == pytest.approx(0)
    assert ids(ranker.rank([b, c, a], viewer, NOW, page=1, page_size=10)) == ["A", "C", "B"]


def test_empty_pool_returns_empty_page(ranker):
    assert ranker.rank([], ViewerContext(), NOW, page=1, page_size=10) == []


def test_output_never_exceeds_page_size_or_remaining(ranker):
    pool = mixed_pool()
    for page_size in (1, 4, 10, 50):
        for page in range(1, 8):
            result = ranker.rank(pool, ViewerContext(), NOW, page=page, page_size=page_size)
            remaining = max(0, len(pool) - (page - 1) * page_size)
            assert len(result) <= page_size
            assert len(result) <= remaining


def test_offset_past_end_is_empty_not_error(ranker):
    pool = mixed_pool(size=5)
    assert ranker.rank(pool, ViewerContext(), NOW, page=2, page_size=5) == []
    assert ranker.rank(pool, ViewerContext(), NOW, page=100, page_size=5) == []


@pytest.mark.parametrize("page,page_size", [(0, 10), (-1, 10), (1, 0), (1, -5)])
def test_non_positive_paging_is_rejected(ranker, page, page_size):
    with pytest.raises(InvalidArgument):
        ranker.rank(mixed_pool(), ViewerContext(), NOW, page=page, page_size=page_size)


def test_ranking_is_deterministic(ranker):
    pool = mixed_pool()
    viewer = ViewerContext(viewer_id="alice", following=frozenset({"carol"}))

    first = ranker.rank(pool, viewer, NOW, page=1, page_size=len(pool))
    second = ranker.rank(list(reversed(pool)), viewer, NOW, page=1, page_size=len(pool))
    assert ids(first) == ids(second)


def test_ties_break_by_newest_then_id(ranker):
    older = make_video("a-old", age_hours=5)
    newer_b = make_video("b-new", age_hours=1)
    newer_a = make_video("a-new", age_hours=1)

    ranked = ranker.rank([older, newer_b, newer_a], ViewerContext(), NOW, page=1, page_size=3)
    assert ids(ranked) == ["a-new", "b-new", "a-old"]


def test_more_likes_never_lowers_score(ranker):
    viewer = ViewerContext()
    previous = None
    for likes in range(0, 200, 7):
        current = ranker.score(make_video("v", age_hours=6, like_count=likes, view_count=3), viewer, NOW)
        if previous is not None:
            assert current >= previous
        previous = current


def test_followed_author_ranks_above_identical_stranger(ranker):
    viewer = ViewerContext(viewer_id="alice", following=frozenset({"bob"}))
    followed = make_video("z-followed", author_id="bob")
    stranger = make_video("a-stranger", author_id="carol")

    ranked = ranker.rank([stranger, followed], viewer, NOW, page=1, page_size=2)
    assert ids(ranked) == ["z-followed", "a-stranger"]


def test_private_videos_never_ranked(ranker):
    private = make_video("secret", author_id="alice", like_count=1000, visibility=Visibility.PRIVATE)
    public = make_video("open", author_id="bob")

    for viewer in (ViewerContext(), ViewerContext(viewer_id="bob"), ViewerContext(viewer_id="alice")):
        assert ids(ranker.rank([private, public], viewer, NOW, page=1, page_size=10)) == ["open"]


def test_pages_concatenate_to_full_ordering(ranker):
    pool = mixed_pool()
    viewer = ViewerContext(viewer_id="alice", following=frozenset({"dave"}))
    full = ids(ranker.rank(pool, viewer, NOW, page=1, page_size=10_000))

    for page_size in (1, 3, 5, 7):
        collected = []
        page = 1
        while True:
            chunk = ranker.rank(pool, viewer, NOW, page=page, page_size=page_size)
            if not chunk:
                break
            collected.extend(ids(chunk))
            page += 1
        assert collected == full
        assert len(set(collected)) == len(pool)


def test_inputs_are_not_mutated(ranker):
    pool = mixed_pool(size=6)
    snapshot = list(pool)
    ranker.rank(pool, ViewerContext(), NOW, page=1, page_size=3)
    assert pool == snapshot
    assert [video.view_count for video in pool] == [video.view_count for video in snapshot]


def test_malformed_record_fails_fast_with_its_id(ranker):
    bad = VideoRecord(id="broken", author_id="bob", created_at=NOW, like_count=float("nan"))
    with pytest.raises(ValidationError) as exc_info:
        ranker.rank([make_video("ok"), bad], ViewerContext(), NOW, page=1, page_size=10)
    assert exc_info.value.video_id == "broken"


def test_malformed_private_record_is_still_reported(ranker):
    bad = VideoRecord(id="hidden", author_id="bob", created_at=NOW, view_count=-1, visibility=Visibility.PRIVATE)
    with pytest.raises(ValidationError):
        ranker.rank([bad], ViewerContext(), NOW, page=1, page_size=10)


def test_cache_does_not_change_ordering():
    pool = mixed_pool()
    viewer = ViewerContext(viewer_id="alice", following=frozenset({"bob"}))
    plain = FeedRanker(RankingSettings())
    cached = FeedRanker(RankingSettings(), cache=EngagementCache())

    expected = ids(plain.rank(pool, viewer, NOW, page=1, page_size=50))
    assert ids(cached.rank(pool, viewer, NOW, page=1, page_size=50)) == expected
    # second pass is served from the cache
    assert ids(cached.rank(pool, viewer, NOW, page=1, page_size=50)) == expected
    assert len(cached.cache) == len(pool)


def test_trending_orders_by_engagement_only(ranker):
    fresh_low = make_video("fresh", age_hours=0, like_count=1)
    old_high = make_video("old", age_hours=240, like_count=50)
    private = make_video("private", like_count=10_000, visibility=Visibility.PRIVATE)

    assert ids(ranker.trending([fresh_low, old_high, private], limit=10)) == ["old", "fresh"]
    assert ids(ranker.trending([fresh_low, old_high], limit=1)) == ["old"]


def test_trending_rejects_non_positive_limit(ranker):
    with pytest.raises(InvalidArgument):
        ranker.trending([], limit=0)
