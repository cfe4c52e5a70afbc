from typing import Optional

from app.core.config import RankingSettings
from app.ranking.records import VideoRecord, ViewerContext

MILLIS_PER_HOUR = 60 * 60 * 1000


def engagement(video: VideoRecord, weights: RankingSettings) -> float:
    return (
        video.like_count * weights.like_weight
        + video.comment_count * weights.comment_weight
        + video.share_count * weights.share_weight
    )


def follow_boost(video: VideoRecord, viewer: ViewerContext, weights: RankingSettings) -> float:
    return weights.follow_boost if viewer.follows(video.author_id) else 0.0


def age_in_hours(video: VideoRecord, now: int) -> float:
    # clock skew: a video "from the future" counts as brand new
    return max(0.0, (now - video.created_at) / MILLIS_PER_HOUR)


def recency_decay(engagement_value: float, video: VideoRecord, now: int, weights: RankingSettings) -> float:
    return engagement_value / (age_in_hours(video, now) + weights.decay_offset_hours)


def score(
    video: VideoRecord,
    viewer: ViewerContext,
    now: int,
    weights: RankingSettings,
    engagement_value: Optional[float] = None,
) -> float:
    if engagement_value is None:
        engagement_value = engagement(video, weights)
    return (
        recency_decay(engagement_value, video, now, weights)
        + follow_boost(video, viewer, weights)
        + video.view_count * weights.view_weight
    )
