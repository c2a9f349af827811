"""Database configuration and session management.

Provides the async SQLAlchemy database handle whose lifecycle is owned by
the application lifespan, and the per-request session dependency.
"""

from collections.abc import AsyncGenerator

import structlog
from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

logger = structlog.get_logger()

# Base class for models
Base = declarative_base()


class Database:
    """Explicitly constructed handle around an async engine.

    Example usage:
        database = Database("sqlite+aiosqlite:///catalogue.db")
        await database.connect()
        async with database.session() as session:
            ...
        await database.disconnect()
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        """Initialize database handle.

        Args:
            url: SQLAlchemy async database URL.
            echo: Whether to log emitted SQL.
        """
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get the connected engine."""
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    async def connect(self) -> None:
        """Create the engine and session factory."""
        self._engine = create_async_engine(
            self.url,
            echo=self.echo,
            pool_pre_ping=True,
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database connected", dialect=self._engine.dialect.name)

    async def create_schema(self) -> None:
        """Create database tables if they don't exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def disconnect(self) -> None:
        """Dispose of the engine and its connection pool."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database disconnected")
        self._engine = None
        self._session_factory = None

    def session(self) -> AsyncSession:
        """Open a new session."""
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession for database operations.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
