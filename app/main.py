from fastapi import FastAPI
import uvicorn
from loguru import logger

from app.core.config import AppSettings
from app.api import api_router


def get_app_settings() -> AppSettings:
    try:
        return AppSettings()
    except Exception as e:
        logger.error(f"Error loading settings: {e}")
        raise

def setup_logging(settings: AppSettings):
    logger.add(
        settings.log_file,
        level=settings.app_log_level.value.upper(),
        rotation=settings.log_rotation,
        compression=settings.log_compression.value,
        format=settings.log_format,
    )

def create_app(settings: AppSettings = None):
    settings = settings or get_app_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Short-video feed ranking API",
        version="1.0.0",
    )
    setup_logging(settings)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}
    app.include_router(api_router)

    return app

app = create_app()

if __name__ == "__main__":
    settings = get_app_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_reload,
    )
