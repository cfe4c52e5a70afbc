import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Tuple

from dateutil import parser as date_parser
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationError
from app.models.users import Follow, Users
from app.models.videos import Video
from app.ranking.records import VideoRecord
from app.utils.clock import from_epoch_ms, to_epoch_ms
from app.utils.security import hash_password


class DataLoaderService:
    """Seeds users, follow edges and videos from a demo JSON document.

    Expected shape::

        {
          "users":   [{"id": "u1", "username": "alice"}],
          "follows": [{"follower_id": "u1", "followee_id": "u2"}],
          "videos":  [{"id": "v1", "author_id": "u2", "created_at": "2025-11-01T10:00:00Z",
                       "like_count": 3, "visibility": "public", ...}]
        }

    Records that already exist are skipped; invalid videos are logged and skipped.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_from_json_file(self, json_file_path: str) -> Dict[str, Any]:
        file_path = Path(json_file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"JSON file not found: {json_file_path}")

        logger.info(f"Loading data from {json_file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        return await self.load(data)

    async def load(self, data: Dict[str, Any]) -> Dict[str, Any]:
        users_loaded = await self._load_users(data.get('users', []))
        follows_loaded = await self._load_follows(data.get('follows', []))
        videos_loaded, skipped_ids = await self._load_videos(data.get('videos', []))

        logger.info(
            f"Data loading completed: {users_loaded} users, {follows_loaded} follows, "
            f"{videos_loaded} videos ({len(skipped_ids)} skipped)"
        )
        return {
            'users': users_loaded,
            'follows': follows_loaded,
            'videos': videos_loaded,
            'skipped': len(skipped_ids),
            'skipped_ids': skipped_ids,
        }

    async def _load_users(self, users_data: List[Dict[str, Any]]) -> int:
        batch = []
        for user_data in users_data:
            if await self.db.get(Users, user_data['id']):
                logger.debug(f"User {user_data['id']} already exists, skipping")
                continue
            password = user_data.get('password')
            batch.append(
                Users(
                    id=user_data['id'],
                    username=user_data['username'],
                    password_hash=hash_password(password) if password else None,
                )
            )

        await self._commit_batch(batch)
        return len(batch)

    async def _load_follows(self, follows_data: List[Dict[str, Any]]) -> int:
        batch = []
        for follow_data in follows_data:
            key = (follow_data['follower_id'], follow_data['followee_id'])
            if key[0] == key[1] or await self.db.get(Follow, key):
                continue
            batch.append(Follow(follower_id=key[0], followee_id=key[1]))

        await self._commit_batch(batch)
        return len(batch)

    async def _load_videos(self, videos_data: List[Dict[str, Any]]) -> Tuple[int, List[str]]:
        batch = []
        skipped_ids = []

        for video_data in videos_data:
            try:
                payload = dict(video_data)
                if payload.get('created_at') is not None:
                    payload['created_at'] = to_epoch_ms(self._parse_datetime(payload['created_at']))
                record = VideoRecord.from_mapping(payload)
            except (ValidationError, ValueError, OverflowError) as e:
                logger.error(f"Skipping video {video_data.get('id', 'unknown')}: {e}")
                skipped_ids.append(str(video_data.get('id', 'unknown')))
                continue

            existing = await self.db.execute(select(Video.id).where(Video.id == record.id))
            if existing.scalar_one_or_none():
                logger.debug(f"Video {record.id} already exists, skipping")
                continue

            batch.append(
                Video(
                    id=record.id,
                    author_id=record.author_id,
                    caption=record.caption,
                    video_url=record.video_url,
                    thumbnail_url=record.thumbnail_url,
                    visibility=record.visibility.value,
                    likes_count=record.like_count,
                    comments_count=record.comment_count,
                    shares_count=record.share_count,
                    views_count=record.view_count,
                    is_deleted=bool(video_data.get('is_deleted', False)),
                    created_at=from_epoch_ms(record.created_at),
                )
            )

        await self._commit_batch(batch)
        return len(batch), skipped_ids

    async def _commit_batch(self, batch: List[Any]) -> None:
        if not batch:
            return
        try:
            self.db.add_all(batch)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error committing batch: {e}")
            raise

    def _parse_datetime(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return from_epoch_ms(value)
        return date_parser.isoparse(value)
