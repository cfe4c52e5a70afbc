from typing import Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AlreadyExists
from app.models.users import Users
from app.utils.security import hash_password, verify_password


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> Optional[Users]:
        result = await self.db.execute(
            select(Users).where(Users.username == username)
        )
        return result.scalar_one_or_none()

    async def register(self, username: str, password: str) -> Users:
        if await self.get_by_username(username):
            raise AlreadyExists(f"Username {username} is already taken")

        logger.info(f"Registering user {username}")

        new_user = Users(username=username, password_hash=hash_password(password))

        self.db.add(new_user)
        await self.db.commit()
        await self.db.refresh(new_user)

        logger.info(f"Registered user {new_user.id} ({username})")
        return new_user

    async def authenticate(self, username: str, password: str) -> Optional[Users]:
        user = await self.get_by_username(username)
        if user is None or not user.password_hash:
            return None
        if not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {username}")
            return None
        return user
