"""
SQLAlchemy base configuration and session management.

Uses SQLAlchemy 2.0 style with type hints and declarative base.
Designed to be portable between SQLite (dev) and PostgreSQL (prod).
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from flightinfo.config import config

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


MEMORY_URLS = ('sqlite://', 'sqlite:///:memory:')


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure each new SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def _set_sqlite_file_pragma(dbapi_connection, connection_record):
    """Journal settings for file-backed SQLite databases."""
    cursor = dbapi_connection.cursor()
    # Write-Ahead Logging for concurrent access
    cursor.execute('PRAGMA journal_mode=WAL')
    cursor.execute('PRAGMA synchronous=NORMAL')
    cursor.close()


def build_engine(url: str) -> Engine:
    """
    Create an engine with settings appropriate for the database type.

    In-memory SQLite databases live as long as their connection, so they
    share a single connection through StaticPool.
    """
    engine_kwargs = {
        'echo': config.debug,  # Log SQL in debug mode
    }

    is_sqlite = url.startswith('sqlite')
    is_memory = url in MEMORY_URLS
    if is_sqlite:
        engine_kwargs['connect_args'] = {'check_same_thread': False}
        if is_memory:
            engine_kwargs['poolclass'] = StaticPool

    new_engine = create_engine(url, **engine_kwargs)

    if is_sqlite:
        event.listen(new_engine, 'connect', _set_sqlite_pragma)
        if not is_memory:
            event.listen(new_engine, 'connect', _set_sqlite_file_pragma)

    return new_engine


engine = build_engine(config.database.url)

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,  # Avoid lazy loading issues
)


def configure_database(url: str) -> Engine:
    """
    Point the session factory at a different database.

    Used by the application factory and by tests.
    """
    global engine
    engine.dispose()
    engine = build_engine(url)
    SessionLocal.configure(bind=engine)
    logger.info(f'Database configured: {engine.url.render_as_string(hide_password=True)}')
    return engine


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Usage:
        with get_session() as session:
            session.scalars(...)

    Automatically handles commit/rollback and session cleanup.
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """
    Initialize database schema.

    Creates all tables if they don't exist. For production,
    use Alembic migrations instead.
    """
    Base.metadata.create_all(bind=engine)
