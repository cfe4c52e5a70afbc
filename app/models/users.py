import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, func

from app.db.database import Base


class Users(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, default=lambda: uuid.uuid4().hex)

    username = Column(String(64), unique=True, index=True, nullable=False)
    password_hash = Column(String(128), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Follow(Base):
    __tablename__ = "follows"

    follower_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    followee_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
