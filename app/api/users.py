from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from app.api.deps import get_feed_service, get_social_graph
from app.core.exceptions import InvalidArgument, NotFound, ValidationError
from app.models.users import Users
from app.schemas.video import FollowResponse, ProfileVideosResponse
from app.services.feed_service import FeedService
from app.services.social_graph import SocialGraph
from app.utils.security import get_current_user, get_optional_user

users_router = APIRouter()


@users_router.post("/{user_id}/follow", response_model=FollowResponse)
async def follow_user(
    user_id: str,
    user: Users = Depends(get_current_user),
    graph: SocialGraph = Depends(get_social_graph),
):
    try:
        changed = await graph.follow(user.id, user_id)
        return FollowResponse(follower_id=user.id, followee_id=user_id, following=True, changed=changed)

    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidArgument as e:
        logger.warning(f"Follow rejected for user={user.id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.exception(f"Error following {user_id} as {user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to follow user"
        )


@users_router.delete("/{user_id}/follow", response_model=FollowResponse)
async def unfollow_user(
    user_id: str,
    user: Users = Depends(get_current_user),
    graph: SocialGraph = Depends(get_social_graph),
):
    try:
        changed = await graph.unfollow(user.id, user_id)
        return FollowResponse(follower_id=user.id, followee_id=user_id, following=False, changed=changed)

    except Exception as e:
        logger.exception(f"Error unfollowing {user_id} as {user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to unfollow user"
        )


@users_router.get("/{user_id}/videos", response_model=ProfileVideosResponse)
async def list_user_videos(
    user_id: str,
    viewer: Optional[Users] = Depends(get_optional_user),
    service: FeedService = Depends(get_feed_service),
):
    viewer_id = viewer.id if viewer else None
    try:
        items = await service.get_profile_videos(user_id, viewer_id)
        return ProfileVideosResponse(user_id=user_id, items=items)

    except ValidationError as e:
        logger.warning(f"Profile listing for {user_id} hit a malformed video: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.exception(f"Error listing videos of {user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list user videos"
        )
