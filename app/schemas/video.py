from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class VideoSummary(BaseModel):
    id: str
    author_id: str
    caption: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    like_count: int = Field(..., ge=0)
    comment_count: int = Field(..., ge=0)
    share_count: int = Field(..., ge=0)
    view_count: int = Field(..., ge=0)
    created_at: int = Field(..., description="Epoch milliseconds")

    model_config = ConfigDict(from_attributes=True)


class FeedResponse(BaseModel):
    page: int
    page_size: int
    items: List[VideoSummary]


class TrendingResponse(BaseModel):
    items: List[VideoSummary]


class ProfileVideosResponse(BaseModel):
    user_id: str
    items: List[VideoSummary]


InteractionKind = Literal["like", "comment", "share", "view"]


class InteractionResponse(BaseModel):
    video: VideoSummary
    kind: InteractionKind


class FollowResponse(BaseModel):
    follower_id: str
    followee_id: str
    following: bool
    changed: bool
