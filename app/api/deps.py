from functools import lru_cache
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import FeedSettings, RankingSettings
from app.db.database import get_db
from app.ranking.cache import EngagementCache
from app.ranking.ranker import FeedRanker
from app.services.feed_service import FeedService
from app.services.interaction_service import InteractionService
from app.services.social_graph import SocialGraph
from app.services.video_store import VideoStore


@lru_cache
def get_feed_settings() -> FeedSettings:
    return FeedSettings()


@lru_cache
def get_ranker() -> FeedRanker:
    # one ranker per process so the engagement cache outlives a single request
    settings = RankingSettings()
    cache: Optional[EngagementCache] = EngagementCache() if settings.cache_enabled else None
    return FeedRanker(settings, cache)


def get_feed_service(
    db: AsyncSession = Depends(get_db),
    ranker: FeedRanker = Depends(get_ranker),
) -> FeedService:
    return FeedService(VideoStore(db), SocialGraph(db), ranker)


def get_interaction_service(
    db: AsyncSession = Depends(get_db),
    ranker: FeedRanker = Depends(get_ranker),
) -> InteractionService:
    return InteractionService(VideoStore(db), ranker.cache)


def get_social_graph(db: AsyncSession = Depends(get_db)) -> SocialGraph:
    return SocialGraph(db)
