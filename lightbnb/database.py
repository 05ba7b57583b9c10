"""
Store handle for PostgreSQL.
Wraps an async SQLAlchemy engine that executes hand-written, parameterized
statements and translates driver failures into typed store errors.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.exc import (
    SQLAlchemyError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy import text, Integer
from lightbnb.config import Settings, get_settings
from lightbnb.utils.exceptions import (
    StoreError,
    StoreNotOpenError,
    StoreUnavailableError,
    QueryExecutionError,
    ConstraintViolationError,
    DuplicateRecordError,
)
from typing import Any, Dict, List, Mapping, Optional
import asyncio
import logging

logger = logging.getLogger(__name__)

# SQLSTATE classes that mean the connection, not the statement, failed
UNAVAILABLE_SQLSTATE_PREFIXES = ("08", "53", "57P")
QUERY_CANCELED_SQLSTATE = "57014"
UNIQUE_VIOLATION_SQLSTATE = "23505"
SQLITE_UNAVAILABLE_MESSAGES = ("database is locked", "unable to open database file")


class Base(DeclarativeBase):
    """
    Base class for the table definitions.
    Every LightBnB table has a serial integer primary key.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _constraint_name(exc: DBAPIError) -> Optional[str]:
    # asyncpg exposes the constraint on the original driver exception
    orig = getattr(exc, "orig", None)
    cause = getattr(orig, "__cause__", None)
    return getattr(cause, "constraint_name", None) or getattr(orig, "constraint_name", None)


def translate_error(exc: BaseException) -> StoreError:
    """
    Map a driver or SQLAlchemy failure onto the store error hierarchy.

    Args:
        exc: Exception raised while executing a statement

    Returns:
        Typed StoreError instance (not raised)
    """
    if isinstance(exc, StoreError):
        return exc

    detail = str(getattr(exc, "orig", None) or exc)

    if isinstance(exc, IntegrityError):
        if _sqlstate(exc) == UNIQUE_VIOLATION_SQLSTATE or "UNIQUE constraint failed" in detail:
            return DuplicateRecordError(detail, constraint=_constraint_name(exc))
        return ConstraintViolationError(detail, constraint=_constraint_name(exc))

    if isinstance(exc, (PoolTimeoutError, OSError, asyncio.TimeoutError)):
        return StoreUnavailableError(detail)

    if isinstance(exc, DBAPIError):
        sqlstate = _sqlstate(exc)
        if exc.connection_invalidated or isinstance(exc, InterfaceError):
            return StoreUnavailableError(detail)
        if sqlstate and (sqlstate.startswith(UNAVAILABLE_SQLSTATE_PREFIXES) or sqlstate == QUERY_CANCELED_SQLSTATE):
            return StoreUnavailableError(detail)
        if isinstance(exc, OperationalError) and sqlstate is None and any(message in detail for message in SQLITE_UNAVAILABLE_MESSAGES):
            return StoreUnavailableError(detail)

    return QueryExecutionError(detail)


class StoreHandle:
    """
    Shared connection/execution handle.
    Opened once at startup, closed at shutdown, and passed to every repository.
    """

    def __init__(self, engine: AsyncEngine, settings: Optional[Settings] = None):
        """
        Initialize the handle around an engine.

        Args:
            engine: Async SQLAlchemy engine that owns the connection pool
            settings: Settings used for environment checks (defaults to cached settings)
        """
        self.engine = engine
        self.settings = settings or get_settings()
        self._open = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "StoreHandle":
        """Create a handle with an engine configured from settings."""
        settings = settings or get_settings()
        engine_kwargs: Dict[str, Any] = {
            "echo": settings.debug,
            "pool_pre_ping": settings.pool_pre_ping,
        }
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_recycle=settings.pool_recycle,
                connect_args={
                    "server_settings": {
                        "application_name": "lightbnb",
                    }
                },
            )
        engine = create_async_engine(settings.database_url, **engine_kwargs)
        return cls(engine, settings=settings)

    @property
    def is_open(self) -> bool:
        return self._open

    async def open(self) -> "StoreHandle":
        """
        Verify connectivity and mark the handle open.

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """
        if self._open:
            return self
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Database connection failed: {e}")
            raise translate_error(e) from e
        self._open = True
        logger.info("Database connection successful")
        return self

    async def close(self) -> None:
        """Dispose of the connection pool."""
        await self.engine.dispose()
        self._open = False
        logger.info("Database connections closed")

    async def __aenter__(self) -> "StoreHandle":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def fetch_all(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Execute one statement in its own transaction and return every row.

        Args:
            sql: SQL text with named placeholders (:name)
            params: Values for the placeholders

        Returns:
            List of rows as dictionaries, empty if nothing matched

        Raises:
            StoreNotOpenError: If the handle has not been opened
            StoreError: Typed failure for anything the store rejects
        """
        if not self._open:
            raise StoreNotOpenError()
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(text(sql), dict(params or {}))
                rows = [dict(row) for row in result.mappings().all()]
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            raise translate_error(e) from e
        return rows

    async def fetch_one(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """Execute one statement and return its first row, or None."""
        rows = await self.fetch_all(sql, params)
        return rows[0] if rows else None

    async def create_schema(self) -> None:
        """
        Create all tables.
        Used by the migration script and the test suite.
        """
        # Registers the table definitions on Base.metadata
        import lightbnb.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_schema(self) -> None:
        """
        Drop all tables.
        This should only be used in testing or development.
        """
        if self.settings.is_production:
            raise RuntimeError("Cannot drop tables in production environment")

        import lightbnb.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    async def get_database_info(self) -> Dict[str, Any]:
        """
        Get database connection information for monitoring.
        Returns the server version and connection pool status.
        """
        version_sql = "SELECT sqlite_version() AS version" if self.engine.dialect.name == "sqlite" else "SELECT version() AS version"
        row = await self.fetch_one(version_sql)
        pool = self.engine.pool
        return {
            "database_version": row["version"] if row else None,
            "pool_status": pool.status(),
        }
