"""
StackIt Backend - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (sqlite+aiosqlite,
       one shared connection via StaticPool) with all tables created.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── engine:         In-memory async engine with the schema created
    ├── db_session:     AsyncSession for service-level tests
    ├── make_user / make_question / make_answer: row factories
    ├── mock_db_session: AsyncMock session for failure-path tests
    └── test_client:    HTTPX AsyncClient bound to create_app(engine=engine)

A test uses either db_session or test_client, not both: they would share
the one in-memory connection.
"""

import os

# Override settings for testing BEFORE any stackit imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["BCRYPT_ROUNDS"] = "4"  # bcrypt minimum, keeps hashing fast
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from stackit.database import create_engine, create_session_factory, create_tables
from stackit.models import Answer, Question, User

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with every StackIt table."""
    test_engine = create_engine(TEST_DATABASE_URL)
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """
    A real AsyncSession on the in-memory database.

    Services only flush, so everything a test writes is visible within the
    session and discarded when it closes.
    """
    factory = create_session_factory(engine)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Row Factories
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_user(db_session):
    """
    Insert a user directly (no password hashing).

    Usage:
        alice = await make_user("alice")
    """
    async def _make_user(username: str, email: Optional[str] = None) -> User:
        user = User(
            username=username,
            email=email or f"{username}@stackit.dev",
            password="not-a-real-hash",
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return _make_user


@pytest.fixture
def make_question(db_session):
    async def _make_question(
        owner: User,
        title: str = "How do I reverse a list?",
        tags: Optional[List[str]] = None,
    ) -> Question:
        question = Question(
            title=title,
            description="Looking for the idiomatic way to do it.",
            tags=tags or ["python"],
            user_id=owner.id,
            user=owner,
        )
        db_session.add(question)
        await db_session.flush()
        return question

    return _make_question


@pytest.fixture
def make_answer(db_session):
    async def _make_answer(
        author: User,
        question: Question,
        content: str = "Use reversed() or slicing with [::-1].",
    ) -> Answer:
        answer = Answer(
            content=content,
            question_id=question.id,
            user_id=author.id,
            user=author,
        )
        db_session.add(answer)
        await db_session.flush()
        return answer

    return _make_answer


# ══════════════════════════════════════════════════════════════════════════
# API Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(engine) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to an app built on the
    test engine; each request commits through its own session.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from stackit.main import create_app

    app = create_app(engine=engine)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

