"""
Database client.
Owns: Async engine construction, session factory, bounded store operations.
"""

import asyncio
import logging
from typing import Any, Awaitable, TypeVar

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.api.config import Settings
from app.api.errors import AppException, InternalException
from .schema import Base

logger = logging.getLogger(__name__)

T = TypeVar("T")

# libpq-style URLs (postgres://, postgresql://) are served by asyncpg
POSTGRES_DRIVERS = {"postgres", "postgresql", "postgresql+psycopg2", "postgresql+psycopg"}


def normalize_database_url(raw_url: str) -> tuple[URL, dict[str, Any]]:
    """
    Rewrite a connection string for the async driver.

    Returns the URL plus driver connect_args. ``sslmode`` is not understood
    by asyncpg, so it is moved into the ``ssl`` connect argument.
    """
    url = make_url(raw_url)
    connect_args: dict[str, Any] = {}

    if url.drivername in POSTGRES_DRIVERS:
        url = url.set(drivername="postgresql+asyncpg")

    if url.drivername == "postgresql+asyncpg" and "sslmode" in url.query:
        connect_args["ssl"] = url.query["sslmode"]
        url = url.difference_update_query(["sslmode"])

    return url, connect_args


def create_engine(settings: Settings) -> AsyncEngine:
    url, connect_args = normalize_database_url(settings.database_url)
    # Bound values (emails, hashes) stay out of exception text
    options: dict[str, Any] = {"pool_pre_ping": True, "hide_parameters": True}

    if url.get_backend_name() == "postgresql":
        # Server side statements are abandoned after the same budget
        connect_args["command_timeout"] = settings.db_timeout_seconds
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_timeout_seconds,
        )

    return create_async_engine(url, connect_args=connect_args, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def ping(engine: AsyncEngine, timeout: float) -> None:
    """Fail fast when the database is unreachable at startup."""

    async def _select_one() -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    await asyncio.wait_for(_select_one(), timeout)


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _describe_error(exc: BaseException) -> str:
    """Error class and SQLAlchemy code only; driver messages can echo row values."""
    code = getattr(exc, "code", None)
    return f"{type(exc).__name__} ({code})" if code else type(exc).__name__


class Store:
    """
    Base for stores backed by the shared connection pool.

    Each operation opens its own session and runs under a time budget;
    cancellation on timeout unwinds the session context, which rolls back
    and returns the connection to the pool.
    """

    def __init__(self, sessions: async_sessionmaker[AsyncSession], timeout: float):
        self._sessions = sessions
        self._timeout = timeout

    async def _run(self, operation: Awaitable[T], failure: str) -> T:
        try:
            return await asyncio.wait_for(operation, self._timeout)
        except AppException:
            raise
        except asyncio.TimeoutError:
            logger.error(
                f"Store operation timed out: {failure}",
                extra={"error": f"exceeded {self._timeout}s"},
            )
            raise InternalException(failure)
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                f"Store operation failed: {failure}",
                extra={"error": _describe_error(e)},
            )
            raise InternalException(failure)
