"""Database setup and the store adapter."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from tagcloud.config import Settings, settings
from tagcloud.utils.store_errors import StoreError, wrap_error

logger = logging.getLogger(__name__)

Base = declarative_base()

Params = Optional[Mapping[str, Any]]


def create_db_engine(url: str, pool_size: int = 10, max_overflow: int = 5) -> Engine:
    """
    Create the SQLAlchemy engine (and its connection pool) for a database URL.

    SQLite needs check_same_thread disabled because FastAPI runs sync handlers
    in a threadpool. In-memory SQLite uses StaticPool so all checkouts share a
    single underlying connection and see the same data (critical for tests).
    """
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        engine_kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if parsed.database in (None, "", ":memory:"):
            engine_kwargs["poolclass"] = StaticPool
        return create_engine(url, **engine_kwargs)

    return create_engine(
        url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
    )


class Store:
    """Executes parameterized statements over a pooled engine."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "Store":
        engine = create_db_engine(
            config.sqlalchemy_url,
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
        )
        return cls(engine)

    def query(self, sql: str, params: Params = None) -> List[Dict[str, Any]]:
        """
        Run a read statement.

        Returns:
            Rows as plain dicts, in the order the database produced them

        Raises:
            StoreError: If the database is unreachable or rejects the statement
        """
        try:
            with self.engine.connect() as conn:
                result = conn.execute(text(sql), dict(params or {}))
                return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            raise self._failed(sql, e) from e

    def execute(self, sql: str, params: Params = None) -> int:
        """
        Run a write statement in its own transaction.

        The transaction is committed on success and rolled back on failure, so
        a failed statement leaves nothing behind.

        Returns:
            Number of affected rows

        Raises:
            StoreError: If the database is unreachable or rejects the statement
        """
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(sql), dict(params or {}))
                return result.rowcount
        except SQLAlchemyError as e:
            raise self._failed(sql, e) from e

    def now(self) -> datetime:
        """Liveness check: ask the database for its current time."""
        rows = self.query("SELECT CURRENT_TIMESTAMP AS now")
        value = rows[0]["now"]
        # SQLite hands timestamps back as text
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        return value

    def check_connection(self) -> bool:
        """Best-effort startup check. Logs the outcome and never raises."""
        try:
            self.now()
        except StoreError as e:
            logger.error(f"Error connecting to the database: {e.message}")
            return False
        logger.info("Successfully connected to the database")
        return True

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()

    @staticmethod
    def _failed(sql: str, error: SQLAlchemyError) -> StoreError:
        store_error = wrap_error(error)
        logger.warning(
            "Statement failed (%s): %s -- %s",
            store_error.kind.value,
            " ".join(sql.split())[:100],
            store_error.message,
        )
        return store_error


def get_store(request: Request) -> Store:
    """Dependency for getting the application's store."""
    return request.app.state.store


def init_db(store: Store) -> None:
    """
    Create the tables if they don't exist.

    Safe to call on existing databases as SQLAlchemy's create_all is
    idempotent. Schema changes are handled by Alembic migrations, see
    tagcloud/database_migrations.py.
    """
    # Import models here to avoid circular import
    # (models.py imports Base from this file)
    from tagcloud import models  # noqa: F401

    Base.metadata.create_all(bind=store.engine)
    logger.info("Database tables initialized")
