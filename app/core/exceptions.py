from typing import Optional


class FeedError(Exception):
    """Base class for errors raised by the feed ranking core and its collaborators."""


class InvalidArgument(FeedError):
    pass


class NotFound(FeedError):
    pass


class ValidationError(FeedError):
    def __init__(self, video_id: Optional[str], reason: str):
        self.video_id = video_id
        self.reason = reason
        super().__init__(f"Invalid video record {video_id!r}: {reason}")


class AlreadyExists(FeedError):
    pass
