"""
Zense Backend - Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the whole suite.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── db_engine:     in-memory SQLite (aiosqlite) with every table created
    ├── db_session:    AsyncSession on that engine, for service tests
    ├── make_user:     inserts a user with a hashed password
    ├── auth_headers:  builds a Bearer header for a user id
    ├── fake_llm:      AsyncMock standing in for GeminiService
    └── test_client:   httpx AsyncClient on the app, DB and LLM overridden
"""

import os

# Must run before anything imports zense.config: settings are read on import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RETRY_MAX_ATTEMPTS"] = "1"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["AUTO_CREATE_TABLES"] = "false"

from typing import Callable, Dict  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from zense.database import Base, enable_sqlite_foreign_keys, get_db_session  # noqa: E402
from zense.models import User  # noqa: E402
from zense.security import create_access_token, hash_password  # noqa: E402


@pytest_asyncio.fixture
async def db_engine():
    """
    One private in-memory database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database. Foreign keys are enforced as in the app engine.
    """
    import zense.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user(db_session):
    """
    Usage:
        alice = await make_user("alice", "alice@example.com")
    """
    async def _make(name: str, email: str, password: str = "password123") -> User:
        user = User(name=name, email=email, password=hash_password(password))
        db_session.add(user)
        await db_session.flush()
        return user

    return _make


@pytest.fixture
def auth_headers() -> Callable[[int], Dict[str, str]]:
    def _headers(user_id: int) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers


@pytest.fixture
def fake_llm():
    llm = MagicMock()
    llm.generate_text = AsyncMock(return_value="I hear you. That sounds really hard.")
    llm.health_check = AsyncMock(return_value=True)
    llm.circuit_breaker = MagicMock(state="closed")
    return llm


@pytest_asyncio.fixture
async def test_client(db_engine, fake_llm):
    """
    HTTPX client wired to the FastAPI app.

    Each request gets its own session on the test engine and commits like
    the real get_db_session, so state persists across requests of a test.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    from zense.dependencies import get_conversation_store, get_llm_service
    from zense.main import app
    from zense.services.vent_service import ConversationStore

    factory = async_sessionmaker(db_engine, expire_on_commit=False)

    async def override_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    store = ConversationStore(max_turns=50)
    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_llm_service] = lambda: fake_llm
    app.dependency_overrides[get_conversation_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
