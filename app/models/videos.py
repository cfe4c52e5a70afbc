import uuid

from sqlalchemy import BigInteger, Boolean, Column, DateTime, ForeignKey, String, Text, func

from app.db.database import Base


class Video(Base):
    __tablename__ = "videos"

    id = Column(String(64), primary_key=True, default=lambda: uuid.uuid4().hex)

    author_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    caption = Column(Text, nullable=True)
    video_url = Column(String(500), nullable=True)
    thumbnail_url = Column(String(500), nullable=True)
    visibility = Column(String(16), nullable=False, default="public")

    likes_count = Column(BigInteger, nullable=False, default=0)
    comments_count = Column(BigInteger, nullable=False, default=0)
    shares_count = Column(BigInteger, nullable=False, default=0)
    views_count = Column(BigInteger, nullable=False, default=0)

    is_deleted = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
