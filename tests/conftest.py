import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("EMAIL_TEST_MODE", "true")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import date, datetime, time

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from task_api.database import Base, get_db
from task_api.main import app
from task_api.models.tasks import Task
from task_api.models.user import User


def local_at(day: date, hour: int = 12) -> datetime:
    """Aware datetime at ``hour`` o'clock server-local time on ``day``."""
    return datetime.combine(day, time(hour)).astimezone()


def make_task(status="pending", deadline=None, task_type="work", owner_id=1, title="Task", **extra):
    return Task(
        user_id=owner_id,
        task_title=title,
        task_status=status,
        task_type=task_type,
        task_deadline=deadline,
        **extra,
    )


@pytest.fixture()
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture()
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def register(client: AsyncClient, username: str) -> dict:
    response = await client.post("/users/register", json={
        "username": username,
        "email": f"{username}@example.com",
        "password": "Secret1!",
    })
    assert response.status_code == 201, response.text
    body = response.json()
    return {"user_id": body["user_id"], "headers": {"Authorization": f"Bearer {body['access_token']}"}}


@pytest.fixture()
async def alice(client):
    return await register(client, "alice")


@pytest.fixture()
async def bob(client):
    return await register(client, "bob")


@pytest.fixture()
async def seed_user(session_factory):
    async def _seed(username: str) -> User:
        async with session_factory() as db:
            user = User(username=username, email=f"{username}@example.com", hashed_password="x")
            db.add(user)
            await db.commit()
            return user
    return _seed
