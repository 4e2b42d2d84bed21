"""Database connection and session management."""
from __future__ import annotations

from typing import Dict, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from .config import get_settings
from .logging_config import get_logger

LOGGER = get_logger(__name__)
SETTINGS = get_settings()


def _enable_sqlite_foreign_keys(engine: Engine, wal: bool = True) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if wal:
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA busy_timeout=30000")  # 30 second timeout
        cursor.close()


def create_db_engine(database_url: str) -> Engine:
    """
    Create an engine with settings appropriate for the backend.

    In-memory SQLite shares one connection (StaticPool) so every session sees
    the same database; file-based SQLite disables pooling; other backends use a
    pre-pinged connection pool.
    """
    if database_url.startswith("sqlite"):
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            db_engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
            _enable_sqlite_foreign_keys(db_engine, wal=False)
        else:
            db_engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},  # Allow multi-threaded access
                poolclass=NullPool,
            )
            _enable_sqlite_foreign_keys(db_engine)
        return db_engine

    return create_engine(
        database_url,
        pool_size=SETTINGS.db_pool_size,
        max_overflow=SETTINGS.db_max_overflow,
        pool_timeout=SETTINGS.db_pool_timeout,
        pool_pre_ping=True,  # Verify connection before usage
    )


engine = create_db_engine(SETTINGS.database_url)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# One engine per connection string
_ENGINES: Dict[str, Engine] = {SETTINGS.database_url: engine}


def engine_for_url(database_url: str) -> Engine:
    """
    Return the shared engine for a connection string, creating it on first use.

    The configured database reuses the module-level ``engine``.
    """
    db_engine = _ENGINES.get(database_url)
    if db_engine is None:
        LOGGER.info("Creating engine for a non-default database URL")
        db_engine = create_db_engine(database_url)
        _ENGINES[database_url] = db_engine
    return db_engine


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def check_database_connection(db_engine: Optional[Engine] = None) -> bool:
    """
    Verify database connectivity.

    Returns:
        True if connection successful, False otherwise.
    """
    db_engine = db_engine or engine
    try:
        with db_engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as exc:
        LOGGER.error("Database connection check failed: %s", exc)
        return False
