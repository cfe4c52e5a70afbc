from typing import Callable, List, Optional

from loguru import logger

from app.ranking.ranker import FeedRanker, check_positive
from app.ranking.records import ViewerContext
from app.schemas.video import VideoSummary
from app.services.ports import CandidateFilter, SocialGraphPort, VideoStorePort
from app.utils.clock import now_ms


class FeedService:
    def __init__(
        self,
        store: VideoStorePort,
        graph: SocialGraphPort,
        ranker: FeedRanker,
        clock: Callable[[], int] = now_ms,
        candidate_filter: Optional[CandidateFilter] = None,
    ):
        self.store = store
        self.graph = graph
        self.ranker = ranker
        self.clock = clock
        self.candidate_filter = candidate_filter or CandidateFilter()

    async def _viewer_context(self, viewer_id: Optional[str]) -> ViewerContext:
        if not viewer_id:
            return ViewerContext.anonymous()
        following = await self.graph.get_following(viewer_id)
        return ViewerContext(viewer_id=viewer_id, following=following)

    async def get_feed(self, viewer_id: Optional[str], page: int, page_size: int) -> List[VideoSummary]:
        # reject bad paging before touching the store
        check_positive("page", page)
        check_positive("page_size", page_size)

        viewer = await self._viewer_context(viewer_id)
        candidates = await self.store.list_candidates(self.candidate_filter)

        ranked = self.ranker.rank(candidates, viewer, self.clock(), page, page_size)

        logger.info(
            f"Feed served: viewer={viewer_id or 'anonymous'} page={page} "
            f"items={len(ranked)} pool={len(candidates)}"
        )
        return [VideoSummary.model_validate(video) for video in ranked]

    async def get_trending(self, limit: int) -> List[VideoSummary]:
        check_positive("limit", limit)

        candidates = await self.store.list_candidates(self.candidate_filter)
        trending = self.ranker.trending(candidates, limit)
        return [VideoSummary.model_validate(video) for video in trending]

    async def get_profile_videos(self, author_id: str, viewer_id: Optional[str]) -> List[VideoSummary]:
        # private videos are only ever listed here, and only to their author
        include_private = viewer_id is not None and viewer_id == author_id
        videos = await self.store.list_by_author(author_id, include_private=include_private)
        return [VideoSummary.model_validate(video) for video in videos]
