from typing import Optional

from loguru import logger

from app.core.exceptions import InvalidArgument, NotFound
from app.ranking.cache import EngagementCache
from app.ranking.records import VideoRecord
from app.services.ports import COUNT_FIELD_BY_KIND, VideoStorePort


class InteractionService:
    """Records explicit viewer interactions. Serving a feed never goes through here."""

    def __init__(self, store: VideoStorePort, cache: Optional[EngagementCache] = None):
        self.store = store
        self.cache = cache

    async def record(self, video_id: str, kind: str) -> VideoRecord:
        field = COUNT_FIELD_BY_KIND.get(kind)
        if field is None:
            raise InvalidArgument(f"Unknown interaction kind: {kind}")

        video = await self.store.increment(video_id, field)
        if video is None:
            raise NotFound(f"Video {video_id} not found")

        if self.cache is not None:
            self.cache.invalidate(video_id)

        logger.info(f"Recorded {kind} on video {video_id} ({field}={getattr(video, field)})")
        return video
