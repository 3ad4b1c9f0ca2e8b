"""
StackIt Backend - Database Session Management
==============================================

What:  Async SQLAlchemy engine construction, session factory, unit-of-work
       helper, and the FastAPI session dependency.
How:   `create_app()` builds an engine with `create_engine()` and stores the
       engine and its session factory on `app.state`. Every request gets its
       own session from that factory through `get_db_session`, which commits
       on success and rolls back on error.
Who:   Route handlers (via Depends), the seed script, Alembic and tests.

Unit of work:
    A request's primary write (answer, comment) and the notifications it
    triggers are flushed through the same session, so they commit or roll
    back together.

SQLite:
    pysqlite defers BEGIN until the first DML statement, which breaks
    SAVEPOINT semantics. For sqlite URLs we take over transaction control
    and emit BEGIN ourselves (the recipe from the SQLAlchemy aiosqlite docs).
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from stackit.config import Settings, settings as default_settings


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this shared metadata, which Alembic reads
    for autogeneration and tests use for `create_all`.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def create_engine(
    database_url: Optional[str] = None,
    config: Settings = default_settings,
) -> AsyncEngine:
    """
    Build an async engine for the given URL (defaults to settings.database_url).

    Server databases get the configured connection pool. SQLite gets
    explicit BEGIN handling; in-memory SQLite additionally shares one
    connection across sessions so every session sees the same database.
    """
    url = database_url or config.database_url

    if not url.startswith("sqlite"):
        return create_async_engine(
            url,
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
            echo=config.log_level == "DEBUG",
        )

    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite+aiosqlite://", "sqlite+aiosqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    engine = create_async_engine(url, echo=config.log_level == "DEBUG", **kwargs)

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


# ── Session Factory ───────────────────────────────────────────────────────
def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    expire_on_commit=False keeps loaded attributes readable after commit,
    outside the session context.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Unit of work: yield a session, commit if the block succeeds, roll back
    and re-raise if it fails, always close.

    Example:
        async with session_scope(factory) as db:
            await answer_service.create_answer(db, user_id, payload)
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides one database session per request.

    The session factory comes from `app.state`, where `create_app()` put it.

    Example usage in a route:
        @router.get("/questions")
        async def list_questions(db: AsyncSession = Depends(get_db_session)):
            return await question_service.get_questions(db)

    Raises:
        Any exception from the handler is re-raised after rollback so the
        global exception handlers can respond.
    """
    async with session_scope(request.app.state.session_factory) as session:
        yield session


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata (tests and local SQLite runs)."""
    import stackit.models  # noqa: F401  registers all mappers

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close all pooled connections. Called during application shutdown."""
    await engine.dispose()
