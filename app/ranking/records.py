import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Mapping, Optional

from app.core.exceptions import ValidationError

COUNT_FIELDS = ("like_count", "comment_count", "share_count", "view_count")


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class VideoRecord:
    id: str
    author_id: str
    created_at: int
    like_count: int = 0
    comment_count: int = 0
    share_count: int = 0
    view_count: int = 0
    visibility: Visibility = Visibility.PUBLIC
    caption: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None

    @property
    def counts(self) -> tuple:
        return tuple(getattr(self, name) for name in COUNT_FIELDS)

    @property
    def is_public(self) -> bool:
        return self.visibility == Visibility.PUBLIC

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "VideoRecord":
        video_id = payload.get("id")
        for required in ("id", "author_id", "created_at"):
            if payload.get(required) is None:
                raise ValidationError(video_id, f"missing required field '{required}'")

        visibility = payload.get("visibility", Visibility.PUBLIC.value)
        try:
            visibility = Visibility(visibility)
        except ValueError:
            raise ValidationError(video_id, f"unknown visibility {visibility!r}")

        record = cls(
            id=video_id,
            author_id=payload["author_id"],
            created_at=payload["created_at"],
            like_count=payload.get("like_count", 0),
            comment_count=payload.get("comment_count", 0),
            share_count=payload.get("share_count", 0),
            view_count=payload.get("view_count", 0),
            visibility=visibility,
            caption=payload.get("caption"),
            video_url=payload.get("video_url"),
            thumbnail_url=payload.get("thumbnail_url"),
        )
        validate_record(record)
        return record


@dataclass(frozen=True)
class ViewerContext:
    viewer_id: Optional[str] = None
    following: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def anonymous(cls) -> "ViewerContext":
        return cls()

    def follows(self, author_id: str) -> bool:
        return author_id in self.following


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_record(record: Any) -> None:
    """Fail fast on a record that cannot be scored. Nothing is coerced."""
    if not isinstance(record, VideoRecord):
        raise ValidationError(getattr(record, "id", None), f"expected VideoRecord, got {type(record).__name__}")

    if not isinstance(record.id, str) or not record.id:
        raise ValidationError(record.id, "id must be a non-empty string")
    if not isinstance(record.author_id, str) or not record.author_id:
        raise ValidationError(record.id, "author_id must be a non-empty string")

    if not _is_number(record.created_at) or not math.isfinite(record.created_at):
        raise ValidationError(record.id, f"created_at must be a finite epoch timestamp, got {record.created_at!r}")

    for name in COUNT_FIELDS:
        value = getattr(record, name)
        if not _is_number(value) or not math.isfinite(value):
            raise ValidationError(record.id, f"{name} must be a finite number, got {value!r}")
        if value < 0:
            raise ValidationError(record.id, f"{name} must be non-negative, got {value!r}")

    if not isinstance(record.visibility, Visibility):
        raise ValidationError(record.id, f"unknown visibility {record.visibility!r}")
