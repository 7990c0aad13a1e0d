import os

# Configure the app before it is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import httpx  # noqa: E402
import pytest  # noqa: E402
from jose import jwt  # noqa: E402

from app import crud  # noqa: E402
from app.db import create_engine_for, create_session_factory, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base  # noqa: E402


@pytest.fixture
async def session_factory():
    """Fresh in-memory database per test"""
    engine = create_engine_for("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


async def _make_user(session_factory, name):
    async with session_factory() as session:
        return await crud.create_user(session, name)


@pytest.fixture
async def alice(session_factory):
    return await _make_user(session_factory, "Alice")


@pytest.fixture
async def bob(session_factory):
    return await _make_user(session_factory, "Bob")


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def make_token(claims: dict) -> str:
    return jwt.encode(claims, "test-secret", algorithm="HS256")


def auth_for(user) -> dict:
    return {"Authorization": f"Bearer {make_token({'userID': user.id})}"}
