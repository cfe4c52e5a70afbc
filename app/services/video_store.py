from typing import List, Optional

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidArgument
from app.models.videos import Video
from app.ranking.records import VideoRecord, Visibility
from app.services.ports import CandidateFilter, VideoStorePort
from app.utils.clock import from_epoch_ms, to_epoch_ms

ORM_COUNT_COLUMNS = {
    "like_count": Video.likes_count,
    "comment_count": Video.comments_count,
    "share_count": Video.shares_count,
    "view_count": Video.views_count,
}


def to_record(video: Video) -> VideoRecord:
    # rows go through the same validation as any other input; a bad row names itself
    return VideoRecord.from_mapping(
        {
            "id": video.id,
            "author_id": video.author_id,
            "created_at": to_epoch_ms(video.created_at) if video.created_at is not None else None,
            "like_count": video.likes_count,
            "comment_count": video.comments_count,
            "share_count": video.shares_count,
            "view_count": video.views_count,
            "visibility": video.visibility,
            "caption": video.caption,
            "video_url": video.video_url,
            "thumbnail_url": video.thumbnail_url,
        }
    )


class VideoStore(VideoStorePort):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_candidates(self, candidate_filter: CandidateFilter) -> List[VideoRecord]:
        stmt = select(Video).where(Video.is_deleted.is_(False))

        if candidate_filter.since is not None:
            stmt = stmt.where(Video.created_at >= from_epoch_ms(candidate_filter.since))
        if candidate_filter.limit is not None:
            stmt = stmt.order_by(Video.created_at.desc(), Video.id).limit(candidate_filter.limit)

        result = await self.db.execute(stmt)
        videos = result.scalars().all()

        logger.debug(f"Loaded {len(videos)} feed candidates (filter={candidate_filter})")
        return [to_record(video) for video in videos]

    async def get_video(self, video_id: str) -> Optional[VideoRecord]:
        result = await self.db.execute(
            select(Video).where(Video.id == video_id, Video.is_deleted.is_(False))
        )
        video = result.scalar_one_or_none()
        return to_record(video) if video else None

    async def list_by_author(self, author_id: str, include_private: bool = False) -> List[VideoRecord]:
        stmt = select(Video).where(Video.author_id == author_id, Video.is_deleted.is_(False))
        if not include_private:
            stmt = stmt.where(Video.visibility == Visibility.PUBLIC.value)
        stmt = stmt.order_by(Video.created_at.desc(), Video.id)

        result = await self.db.execute(stmt)
        return [to_record(video) for video in result.scalars().all()]

    async def increment(self, video_id: str, field: str, delta: int = 1) -> Optional[VideoRecord]:
        column = ORM_COUNT_COLUMNS.get(field)
        if column is None:
            raise InvalidArgument(f"Unknown counter field: {field}")
        if delta < 1:
            raise InvalidArgument(f"delta must be positive, got {delta}")

        result = await self.db.execute(
            update(Video)
            .where(Video.id == video_id, Video.is_deleted.is_(False))
            .values({column: column + delta})
        )
        if result.rowcount == 0:
            await self.db.rollback()
            return None

        await self.db.commit()
        logger.debug(f"Incremented {field} by {delta} for video {video_id}")

        refreshed = await self.db.execute(
            select(Video).where(Video.id == video_id).execution_options(populate_existing=True)
        )
        return to_record(refreshed.scalar_one())
