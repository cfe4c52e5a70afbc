from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings
from enum import Enum

class BaseConfig(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name":True
    }

class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

class CompressionType(str, Enum):
    GZIP = "gz"
    BZIP2 = "bz2"
    ZIP = "zip"

class AppSettings(BaseSettings):
    app_name: str = Field(
        default="Clipfeed API",
        min_length=1,
        max_length=100,
        alias="APP_NAME"
    )
    app_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        alias="APP_PORT"
    )

    app_host: str = Field(default="0.0.0.0")
    app_reload: bool = Field(default=False)
    app_log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}")
    log_file: str = Field(default="logs/app.log")
    log_rotation: str = Field(default="1 day")
    log_compression: CompressionType = Field(default=CompressionType.GZIP)

    model_config = BaseConfig.model_config

class DatabaseSettings(BaseSettings):
    postgres_user: str = Field(default="postgres", min_length=1, alias="POSTGRES_USER")
    postgres_password: str = Field(default="postgres", min_length=1, alias="POSTGRES_PASSWORD")
    postgres_db: str = Field(default="clipfeed", min_length=1, alias="POSTGRES_DB")
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, ge=1, le=65535, alias="POSTGRES_PORT")
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")
    debug_sql: bool = Field(default=False)

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    model_config = BaseConfig.model_config


class JWTSettings(BaseSettings):
    secret_key: str = Field(default="change-me-change-me-change-me-change-me", min_length=32, alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, ge=1, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    model_config = BaseConfig.model_config


class RankingSettings(BaseSettings):
    """Feed scoring weights.

    score = engagement / (age_hours + decay_offset_hours)
            + follow_boost (author followed)
            + view_count * view_weight

    engagement = likes * like_weight + comments * comment_weight + shares * share_weight
    """

    like_weight: float = Field(default=2.0, ge=0, alias="RANKING_LIKE_WEIGHT")
    comment_weight: float = Field(default=3.0, ge=0, alias="RANKING_COMMENT_WEIGHT")
    share_weight: float = Field(default=4.0, ge=0, alias="RANKING_SHARE_WEIGHT")
    view_weight: float = Field(default=0.1, ge=0, alias="RANKING_VIEW_WEIGHT")
    follow_boost: float = Field(default=1000.0, ge=0, alias="RANKING_FOLLOW_BOOST")
    decay_offset_hours: float = Field(default=1.0, gt=0, alias="RANKING_DECAY_OFFSET_HOURS")
    cache_enabled: bool = Field(default=True, alias="RANKING_CACHE_ENABLED")

    model_config = BaseConfig.model_config


class FeedSettings(BaseSettings):
    default_page_size: int = Field(default=10, ge=1, alias="FEED_DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=50, ge=1, alias="FEED_MAX_PAGE_SIZE")
    trending_limit: int = Field(default=50, ge=1, alias="FEED_TRENDING_LIMIT")
    max_trending_limit: int = Field(default=100, ge=1, alias="FEED_MAX_TRENDING_LIMIT")

    model_config = BaseConfig.model_config
