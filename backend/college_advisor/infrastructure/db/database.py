"""
Database Configuration for College Advisor

Async SQLAlchemy engine and session management for the SQLite lookup store.
A single engine (connection pool) is opened at application startup and
disposed at shutdown; each lookup acquires its own short-lived session.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy import text
from sqlmodel import SQLModel

from college_advisor.config.settings import settings


SQLITE_PREFIX = "sqlite+aiosqlite:///"


def build_database_url(database_url: str, read_only: bool) -> str:
    """
    Rewrite a SQLite URL so the file is opened read-only.

    sqlite+aiosqlite:///./db/mydb.sqlite
        -> sqlite+aiosqlite:///file:./db/mydb.sqlite?mode=ro&uri=true

    In-memory databases and URLs that are already URI-style are returned as is.
    """
    if not read_only or not database_url.startswith(SQLITE_PREFIX):
        return database_url

    path = database_url[len(SQLITE_PREFIX):]
    if not path or path == ":memory:" or path.startswith("file:"):
        return database_url

    return f"{SQLITE_PREFIX}file:{path}?mode=ro&uri=true"


class DatabaseManager:
    """
    Manages the async engine and session factory for the lookup store.

    The engine is created lazily on first use and shared by every session
    handed out until close() is called.
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        read_only: Optional[bool] = None,
        echo: Optional[bool] = None,
    ):
        self._database_url = database_url or settings.database_url
        self._read_only = settings.database_read_only if read_only is None else read_only
        self._echo = settings.database_echo if echo is None else echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create async engine."""
        if self._engine is None:
            self._initialize_engine()
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create session factory."""
        if self._session_factory is None:
            self._initialize_engine()
        return self._session_factory

    def _initialize_engine(self) -> None:
        """Initialize async engine and session factory."""
        self._engine = create_async_engine(
            build_database_url(self._database_url, self._read_only),
            echo=self._echo,
            pool_pre_ping=True,  # Verify connections before use
        )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Acquire a session for one lookup and release it afterwards.

        Usage:
            async with db.session() as session:
                result = await session.execute(query)
        """
        async with self.session_factory() as session:
            yield session

    async def create_tables(self) -> None:
        """Create all tables from SQLModel metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def ping(self) -> None:
        """Run a trivial query to verify the store is reachable."""
        async with self.session() as session:
            await session.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Close engine and dispose of connection pool."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None


# Global instance (lazy initialization)
_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Get or create the process-wide database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def init_db() -> None:
    """Open the connection pool (called on app startup)."""
    await get_db_manager().ping()


async def close_db() -> None:
    """Close the connection pool (called on app shutdown)."""
    await get_db_manager().close()
