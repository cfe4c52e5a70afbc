import threading
from typing import Callable, Dict, Tuple

from loguru import logger

from app.ranking.records import VideoRecord


class EngagementCache:
    """Memoized engagement per video id.

    Each entry remembers the counts it was computed from, so a record whose
    counts moved without an invalidation is recomputed instead of served stale.
    Writers (stores, invalidations) serialize on one lock; readers never take it.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[tuple, float]] = {}
        self._write_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, video_id: str) -> bool:
        return video_id in self._entries

    def get_or_compute(self, video: VideoRecord, compute: Callable[[VideoRecord], float]) -> float:
        counts = video.counts
        entry = self._entries.get(video.id)
        if entry is not None and entry[0] == counts:
            return entry[1]

        value = compute(video)
        with self._write_lock:
            self._entries[video.id] = (counts, value)
        return value

    def invalidate(self, video_id: str) -> None:
        with self._write_lock:
            if self._entries.pop(video_id, None) is not None:
                logger.debug(f"Engagement cache entry dropped for video {video_id}")

    def clear(self) -> None:
        with self._write_lock:
            self._entries.clear()
