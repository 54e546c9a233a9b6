import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from tests.utils.http import bearer, refresh_cookie
from src.depends import get_storage, get_unit_of_work
from src.adapter.services.local_storage import LocalStorage
from src.adapter.services.seeder import seed
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork

PASSWORD = TestDataLoader.get("password")


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session_factory):
    async with session_factory() as session:
        return await seed(
            SqlAlchemyUnitOfWork(session), TestDataLoader.get_copy("rbac"), bcrypt_rounds=4
        )


@pytest_asyncio.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage")


@pytest_asyncio.fixture
async def client(session_factory, storage, seeded):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # One session per request, as in production
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def login(client):
    """Log in and return (access_token, refresh_token)."""

    async def _login(email: str, password: str = PASSWORD):
        response = await client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["accessToken"], refresh_cookie(response)

    return _login


@pytest_asyncio.fixture
def upload(client):
    """Upload a document as the token's owner and return the response JSON."""

    async def _upload(access_token: str, key: str = "report"):
        doc = TestDataLoader.get("documents")[key]
        response = await client.post(
            "/documents",
            data={"title": doc["title"]},
            files={"file": (doc["filename"], doc["content"].encode(), doc["content_type"])},
            headers=bearer(access_token),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _upload
