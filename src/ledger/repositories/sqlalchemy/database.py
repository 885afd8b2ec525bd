"""Database connection and session management."""

import logging
from typing import Optional

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from ledger.config.settings import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, **engine_kwargs) -> Engine:
    """
    Create an engine for the ledger store.

    SQLite connections get foreign-key enforcement switched on so that a
    transaction referencing a missing account is rejected by the store.
    """
    connect_args = engine_kwargs.pop("connect_args", {})
    if database_url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)
    engine = create_engine(
        database_url,
        connect_args=connect_args,
        echo=False,
        **engine_kwargs,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to an engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


def init_db(engine: Engine) -> int:
    """Bring the schema up to date; return the resulting schema version."""
    from ledger.repositories.sqlalchemy.migrations import run_migrations

    return run_migrations(engine)


def open_store(settings: Settings) -> tuple[Engine, sessionmaker]:
    """
    Open the ledger store described by `settings`.

    Called once at process start; everything downstream receives the
    returned session factory instead of looking up configuration.
    """
    database_url = settings.get_database_url()
    engine = create_db_engine(database_url)
    version = init_db(engine)
    logger.info("Opened ledger store at %s (schema v%d)", database_url, version)
    return engine, create_session_factory(engine)


def close_store(engine: Optional[Engine]) -> None:
    """Dispose of the engine's connection pool."""
    if engine is not None:
        engine.dispose()
