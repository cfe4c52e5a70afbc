from typing import Iterable, List, Optional, Sequence

from loguru import logger

from app.core.config import RankingSettings
from app.core.exceptions import InvalidArgument
from app.ranking import scoring
from app.ranking.cache import EngagementCache
from app.ranking.records import VideoRecord, ViewerContext, validate_record


def check_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")


class FeedRanker:
    def __init__(self, weights: Optional[RankingSettings] = None, cache: Optional[EngagementCache] = None):
        self.weights = weights or RankingSettings()
        self.cache = cache

    def _engagement(self, video: VideoRecord) -> float:
        if self.cache is None:
            return scoring.engagement(video, self.weights)
        return self.cache.get_or_compute(video, lambda v: scoring.engagement(v, self.weights))

    def _eligible(self, videos: Iterable[VideoRecord]) -> List[VideoRecord]:
        # validate the whole pool before dropping anything so bad data is never hidden
        pool = list(videos)
        for video in pool:
            validate_record(video)
        return [video for video in pool if video.is_public]

    def score(self, video: VideoRecord, viewer: ViewerContext, now: int) -> float:
        validate_record(video)
        return scoring.score(video, viewer, now, self.weights, engagement_value=self._engagement(video))

    def rank(
        self,
        videos: Sequence[VideoRecord],
        viewer: ViewerContext,
        now: int,
        page: int,
        page_size: int,
    ) -> List[VideoRecord]:
        check_positive("page", page)
        check_positive("page_size", page_size)

        candidates = self._eligible(videos)
        offset = (page - 1) * page_size
        if offset >= len(candidates):
            return []

        keyed = [
            (
                -scoring.score(video, viewer, now, self.weights, engagement_value=self._engagement(video)),
                -video.created_at,
                video.id,
                video,
            )
            for video in candidates
        ]
        keyed.sort(key=lambda item: item[:3])

        result = [item[3] for item in keyed[offset:offset + page_size]]
        logger.debug(
            f"Ranked {len(candidates)}/{len(videos)} candidates for viewer={viewer.viewer_id} "
            f"page={page} page_size={page_size} -> {len(result)}"
        )
        return result

    def trending(self, videos: Sequence[VideoRecord], limit: int) -> List[VideoRecord]:
        check_positive("limit", limit)

        candidates = self._eligible(videos)
        candidates.sort(key=lambda video: (-self._engagement(video), -video.created_at, video.id))
        return candidates[:limit]
