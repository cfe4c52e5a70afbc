import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.db.database import get_db, init_db_schema
from app.services.data_loader_service import DataLoaderService


@pytest.fixture()
def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    asyncio.run(init_db_schema(engine))
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    asyncio.run(engine.dispose())


@pytest.fixture()
def seed(session_factory):
    def _seed(data: dict) -> dict:
        async def scenario():
            async with session_factory() as session:
                return await DataLoaderService(session).load(data)
        return asyncio.run(scenario())
    return _seed


@pytest.fixture()
def client(session_factory):
    from app.api.deps import get_ranker
    from app.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    get_ranker.cache_clear()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    get_ranker.cache_clear()


