from app.ranking.cache import EngagementCache
from app.ranking.ranker import FeedRanker
from app.ranking.records import VideoRecord, ViewerContext, Visibility, validate_record

__all__ = [
    "EngagementCache",
    "FeedRanker",
    "VideoRecord",
    "ViewerContext",
    "Visibility",
    "validate_record",
]
