from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from app.ranking.records import VideoRecord

COUNT_FIELD_BY_KIND = {
    "like": "like_count",
    "comment": "comment_count",
    "share": "share_count",
    "view": "view_count",
}


@dataclass(frozen=True)
class CandidateFilter:
    # epoch milliseconds; only videos created at or after this instant
    since: Optional[int] = None
    # newest N candidates; None means the whole catalogue
    limit: Optional[int] = None


class VideoStorePort(ABC):
    @abstractmethod
    async def list_candidates(self, candidate_filter: CandidateFilter) -> List[VideoRecord]:
        raise NotImplementedError

    @abstractmethod
    async def get_video(self, video_id: str) -> Optional[VideoRecord]:
        raise NotImplementedError

    @abstractmethod
    async def list_by_author(self, author_id: str, include_private: bool = False) -> List[VideoRecord]:
        raise NotImplementedError

    @abstractmethod
    async def increment(self, video_id: str, field: str, delta: int = 1) -> Optional[VideoRecord]:
        raise NotImplementedError


class SocialGraphPort(ABC):
    @abstractmethod
    async def get_following(self, viewer_id: str) -> FrozenSet[str]:
        raise NotImplementedError

    @abstractmethod
    async def follow(self, follower_id: str, followee_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def unfollow(self, follower_id: str, followee_id: str) -> bool:
        raise NotImplementedError
