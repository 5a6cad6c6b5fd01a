"""SQLite engine, session scope and schema setup for the content store."""

import os
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///data/schema_manager.db"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


_engine = None
_SessionFactory: sessionmaker | None = None


def _enable_pragmas(dbapi_conn, connection_record):
    """Enable WAL journal mode and foreign keys on every SQLite connection."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL;")
    cursor.execute("PRAGMA synchronous=NORMAL;")
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.execute("PRAGMA busy_timeout=5000;")
    cursor.close()


def is_memory_url(database_url: str) -> bool:
    return database_url == "sqlite://" or ":memory:" in database_url


def get_engine(database_url: str | None = None, echo: bool = False):
    """Return (and cache) the global SQLAlchemy engine.

    Args:
        database_url: SQLite connection string.  Falls back to the
                      ``SCHEMA_MANAGER_DATABASE_URL`` / ``DATABASE_URL``
                      env-vars or a local file.
        echo: Whether to log every SQL statement.
    """
    global _engine
    if _engine is not None:
        return _engine

    if database_url is None:
        database_url = (
            os.getenv("SCHEMA_MANAGER_DATABASE_URL")
            or os.getenv("DATABASE_URL")
            or DEFAULT_DATABASE_URL
        )

    engine_kwargs: dict = {
        "echo": echo,
        "connect_args": {"check_same_thread": False},
    }
    if is_memory_url(database_url):
        # One shared connection, otherwise every session sees an empty database.
        engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_pre_ping"] = True
        if database_url.startswith("sqlite:///"):
            Path(database_url.replace("sqlite:///", "")).parent.mkdir(parents=True, exist_ok=True)

    _engine = create_engine(database_url, **engine_kwargs)

    event.listen(_engine, "connect", _enable_pragmas)
    logger.info("Database engine created: %s", database_url)
    return _engine


def get_session_factory(engine=None) -> sessionmaker:
    """Return (and cache) the global session factory."""
    global _SessionFactory
    if _SessionFactory is not None:
        return _SessionFactory
    if engine is None:
        engine = get_engine()
    _SessionFactory = sessionmaker(bind=engine, expire_on_commit=False)
    return _SessionFactory


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Provide a transactional database session via context manager.

    Usage::

        with get_session() as session:
            session.add(obj)
    """
    factory = get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(database_url: str | None = None, echo: bool = False) -> None:
    """Create all tables that do not yet exist.

    Imports the model package so that ``Base.metadata`` is fully
    populated before issuing ``CREATE TABLE`` statements.
    """
    engine = get_engine(database_url=database_url, echo=echo)
    # Side-effect import: registers all models with Base.metadata
    import schema_manager.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("All database tables created / verified.")


def reset_db(database_url: str | None = None) -> None:
    """Drop and recreate every table.  **Destructive**, use only in tests."""
    engine = get_engine(database_url=database_url)
    import schema_manager.models  # noqa: F401
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.warning("Database has been reset (all tables dropped and recreated).")


def reset_engine() -> None:
    """Dispose of the cached engine and session factory (useful for tests)."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None


def check_connection() -> tuple[bool, str]:
    """Run ``SELECT 1`` against the engine; returns (ok, detail)."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        return False, str(exc)
    return True, str(get_engine().url)
