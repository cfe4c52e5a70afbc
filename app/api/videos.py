from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger

from app.api.deps import get_feed_service, get_feed_settings, get_interaction_service
from app.core.exceptions import InvalidArgument, NotFound, ValidationError
from app.models.users import Users
from app.schemas.video import InteractionKind, InteractionResponse, TrendingResponse, VideoSummary
from app.services.feed_service import FeedService
from app.services.interaction_service import InteractionService
from app.utils.security import get_current_user

videos_router = APIRouter()

feed_settings = get_feed_settings()


@videos_router.get("/trending", response_model=TrendingResponse)
async def get_trending(
    limit: int = Query(default=feed_settings.trending_limit, ge=1, le=feed_settings.max_trending_limit),
    service: FeedService = Depends(get_feed_service),
):
    try:
        items = await service.get_trending(limit)
        return TrendingResponse(items=items)

    except (InvalidArgument, ValidationError) as e:
        logger.warning(f"Trending request rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.exception(f"Error building trending list: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build trending list"
        )


@videos_router.post("/{video_id}/interactions/{kind}", response_model=InteractionResponse)
async def record_interaction(
    video_id: str,
    kind: InteractionKind,
    user: Users = Depends(get_current_user),
    service: InteractionService = Depends(get_interaction_service),
):
    try:
        video = await service.record(video_id, kind)
        return InteractionResponse(video=VideoSummary.model_validate(video), kind=kind)

    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (InvalidArgument, ValidationError) as e:
        logger.warning(f"Interaction rejected for user={user.id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.exception(f"Error recording {kind} on video {video_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record interaction"
        )
