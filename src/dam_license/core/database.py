"""Database management for repository worlds."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from dam_license.models import Base

logger = logging.getLogger(__name__)

__all__ = ["DatabaseManager"]


class DatabaseManager:
    """
    Manages asynchronous database connections and sessions for a single world.

    An instance of DatabaseManager is bound to the event loop it is first used in;
    script runners executing in other threads create their own instance.
    """

    def __init__(self, database_url: str):
        """
        Initialize the DatabaseManager.

        Args:
            database_url: The database connection URL, e.g. ``sqlite+aiosqlite:///repo.db``.

        """
        self.database_url = database_url
        self._engine: AsyncEngine | None = None
        self._session_local: async_sessionmaker[AsyncSession] | None = None
        self._initialize_engine()

    def _initialize_engine(self) -> None:
        if not self.database_url:
            raise ValueError("database_url not set. Cannot initialize database.")

        self._engine = create_async_engine(self.database_url)
        self._session_local = async_sessionmaker(bind=self._engine, expire_on_commit=False)
        logger.info("Initialized async database engine for (%s)", self.database_url)

    @property
    def engine(self) -> AsyncEngine:
        """Return the SQLAlchemy AsyncEngine."""
        if self._engine is None:
            raise RuntimeError("Async Database engine has not been initialized.")
        return self._engine

    def get_db_session(self) -> AsyncSession:
        """
        Provide a new asynchronous database session.

        The caller is responsible for closing the session, typically using `async with`.
        """
        if self._session_local is None:
            raise RuntimeError("AsyncSessionLocal has not been initialized and cannot create a session.")
        return self._session_local()

    async def create_db_and_tables(self) -> None:
        """Create all database tables using the async engine."""
        logger.info("Attempting to create database tables...")
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created (or verified existing) for (%s)", self.database_url)
        except Exception:
            logger.exception("Error creating tables.")
            raise

    async def dispose(self) -> None:
        """Dispose of the engine's connection pool."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.debug("Disposed database engine for (%s)", self.database_url)
