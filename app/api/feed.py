from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger

from app.api.deps import get_feed_service, get_feed_settings
from app.core.exceptions import InvalidArgument, ValidationError
from app.models.users import Users
from app.schemas.video import FeedResponse
from app.services.feed_service import FeedService
from app.utils.security import get_optional_user

feed_router = APIRouter()

feed_settings = get_feed_settings()


@feed_router.get("", response_model=FeedResponse)
async def get_feed(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=feed_settings.default_page_size, ge=1, le=feed_settings.max_page_size),
    viewer: Optional[Users] = Depends(get_optional_user),
    service: FeedService = Depends(get_feed_service),
):
    viewer_id = viewer.id if viewer else None
    try:
        items = await service.get_feed(viewer_id, page=page, page_size=page_size)
        return FeedResponse(page=page, page_size=page_size, items=items)

    except (InvalidArgument, ValidationError) as e:
        logger.warning(f"Feed request rejected for viewer={viewer_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.exception(f"Error building feed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build feed"
        )
