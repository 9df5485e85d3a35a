"""
BrandAgent Backend - Store (Engine, Sessions, Schema Lifecycle)
=================================================================

What:  The `Store` object owning the async SQLAlchemy engine and session factory.
Why:   One explicitly constructed object per application instead of a
       module-level engine. create_app() builds it from settings; tests build
       one against a temporary SQLite file.
How:   Wraps create_async_engine + async_sessionmaker. `session()` is an
       async context manager that commits on success and rolls back on error.
Who:   Services receive a Store per call; routes get it via Depends(get_store).

Concurrency:
    Each session() call runs in its own transaction. The application takes
    no locks; multi-step flows such as "insert user unless the email exists"
    rely on the unique index and surface the IntegrityError to the caller.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object so Store.create_schema() creates
    every table registered by brandagent.models.
    """
    pass


def _engine_options(database_url: str, echo: bool) -> Dict[str, Any]:
    # SQLite (file or :memory:) picks its own pool class; sizing args only
    # apply to server databases
    options: Dict[str, Any] = {"echo": echo}
    if not database_url.startswith("sqlite"):
        # pool_pre_ping: drop connections the server closed while idle
        # pool_recycle: recycle hourly, before server-side idle timeouts bite
        options.update(pool_size=10, max_overflow=5, pool_pre_ping=True, pool_recycle=3600)
    return options


class Store:
    """
    Relational store holding the `users` and `submissions` tables.

    Lifecycle:
        store = Store(url)
        await store.create_schema()   # startup, idempotent
        async with store.session() as session: ...
        await store.dispose()         # shutdown
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine: AsyncEngine = create_async_engine(
            database_url, **_engine_options(database_url, echo)
        )
        # expire_on_commit=False: ORM objects stay readable after the
        # session closes (services build response models from them)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a transactional session.

        On success: commits. On any error: rolls back and re-raises so the
        service layer can translate the failure. Always closes the session.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_schema(self) -> None:
        """
        Create missing tables. Existing tables and rows are left untouched.

        Why create_all instead of migrations: two fixed tables whose columns
        never change, so there is nothing for a migration tool to track.
        """
        # Registers User and Submission with Base.metadata
        from brandagent.models import submission, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Run a trivial query; raises if the store is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


# ── Dependency ────────────────────────────────────────────────────────────
def get_store(request: Request) -> Store:
    """FastAPI dependency returning the Store attached by create_app()."""
    return request.app.state.store
