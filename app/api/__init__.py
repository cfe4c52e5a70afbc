from fastapi import APIRouter
from app.api import auth, feed, users, videos

api_router = APIRouter()

api_router.include_router(auth.auth_router, prefix="/auth", tags=["auth"])

api_router.include_router(feed.feed_router, prefix="/feed", tags=["feed"])
api_router.include_router(videos.videos_router, prefix="/videos", tags=["videos"])
api_router.include_router(users.users_router, prefix="/users", tags=["users"])

__all__ = ["api_router"]
