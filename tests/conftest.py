import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from runtracker.main import app
from runtracker.core.database import Base, get_db_session
from runtracker.repositories.user_repository import UserRepository
from runtracker.services.auth_service import AuthService

TEST_DB_URL = "sqlite+aiosqlite://"

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine):
    factory = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await AuthService(UserRepository(session)).ensure_user(ADMIN_USERNAME, ADMIN_PASSWORD)
        await session.commit()
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def machine_payload(machine_id: str = "MAC-01", **overrides) -> dict:
    record = {
        "id": machine_id,
        "displayId": machine_id.split("-")[-1],
        "status": "PAUSED",
        "startTime": None,
        "accumulatedTime": 0,
        "targetTime": 288000000,
        "wasRunningBeforeOutage": False,
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_machine():
    return machine_payload
