import os

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient
from motor.motor_asyncio import AsyncIOMotorClient

from movies_api.core.config import settings
from movies_api.dependencies import get_movies_repo
from movies_api.main import app
from movies_api.services.mapper import MovieMapper
from movies_api.services.movies_service import MoviesService
from tests.helpers import InMemoryMoviesRepo


@pytest.fixture(scope="session", autouse=True)
def test_env():
    os.environ["SENTRY_DSN"] = ""  # Sentry off
    settings.sentry_dsn = ""
    # the motor client is created lazily and never contacted in unit tests
    settings.mongo_ping_on_startup = False


@pytest.fixture
def repo() -> InMemoryMoviesRepo:
    return InMemoryMoviesRepo()


@pytest.fixture
def service(repo) -> MoviesService:
    return MoviesService(repo, MovieMapper())


@pytest.fixture
async def client(repo):
    app.dependency_overrides[get_movies_repo] = lambda: repo
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport,
                                   base_url="http://test") as ac:
                yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def mongo_db():
    """Real Mongo when MONGO_TEST_DSN is set, in-process mongomock otherwise."""
    dsn = os.environ.get("MONGO_TEST_DSN")
    if not dsn:
        client = AsyncMongoMockClient(tz_aware=True)
        yield client["movies_test"]
        return
    client = AsyncIOMotorClient(dsn, tz_aware=True)
    db = client[dsn.split("/")[-1].split("?")[0] or "movies_test"]
    for name in await db.list_collection_names():
        await db[name].delete_many({})
    yield db
    client.close()
