from typing import FrozenSet

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidArgument, NotFound
from app.models.users import Follow, Users
from app.services.ports import SocialGraphPort


class SocialGraph(SocialGraphPort):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_following(self, viewer_id: str) -> FrozenSet[str]:
        result = await self.db.execute(
            select(Follow.followee_id).where(Follow.follower_id == viewer_id)
        )
        return frozenset(result.scalars().all())

    async def follow(self, follower_id: str, followee_id: str) -> bool:
        if follower_id == followee_id:
            raise InvalidArgument("Users cannot follow themselves")

        followee = await self.db.get(Users, followee_id)
        if followee is None:
            raise NotFound(f"User {followee_id} not found")

        existing = await self.db.get(Follow, (follower_id, followee_id))
        if existing:
            logger.debug(f"User {follower_id} already follows {followee_id}")
            return False

        self.db.add(Follow(follower_id=follower_id, followee_id=followee_id))
        await self.db.commit()

        logger.info(f"User {follower_id} followed {followee_id}")
        return True

    async def unfollow(self, follower_id: str, followee_id: str) -> bool:
        result = await self.db.execute(
            delete(Follow).where(
                Follow.follower_id == follower_id,
                Follow.followee_id == followee_id,
            )
        )
        await self.db.commit()

        removed = result.rowcount > 0
        if removed:
            logger.info(f"User {follower_id} unfollowed {followee_id}")
        return removed
