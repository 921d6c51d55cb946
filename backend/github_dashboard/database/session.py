"""
Database engine and per-request sessions.

The URL comes from AppSettings.database_url (DATABASE_URL). Without it the
API still starts; database-backed routes answer 503.

Usage:
    from github_dashboard.database.session import get_db_session

    @router.get("/dashboards")
    async def list_dashboards(db: Session = Depends(get_db_session)):
        ...
"""

import logging
from functools import lru_cache
from typing import Generator

from fastapi import HTTPException, status
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from github_dashboard.config.settings import get_settings

logger = logging.getLogger(__name__)

POOL_SIZE = 5
MAX_OVERFLOW = 10
POOL_RECYCLE_SECONDS = 1800


class DatabaseNotConfiguredError(ValueError):
    """DATABASE_URL is not set."""


def get_database_url() -> str:
    """
    Normalized database URL from settings.

    Raises:
        DatabaseNotConfiguredError: If DATABASE_URL is unset or blank
    """
    database_url = get_settings().database_url
    if not database_url:
        raise DatabaseNotConfiguredError("DATABASE_URL environment variable is not set")
    return database_url


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Engine shared by the process. SQLite URLs skip pool sizing."""
    database_url = get_database_url()

    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(
            database_url,
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
            pool_pre_ping=True,
            pool_recycle=POOL_RECYCLE_SECONDS,
        )

    logger.info("Database engine created", extra={"dialect": engine.dialect.name})
    return engine


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def reset_engine() -> None:
    """Drop the cached engine and factory so the next call rereads settings."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()


async def get_db_session() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.

    Raises HTTP 503 if the database is not configured.
    """
    try:
        factory = get_session_factory()
    except DatabaseNotConfiguredError:
        logger.warning("Database request without DATABASE_URL")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not configured",
        )

    session = factory()
    try:
        yield session
    finally:
        session.close()


def get_db_session_sync() -> Generator[Session, None, None]:
    """
    Session generator for scripts.

    Usage:
        for session in get_db_session_sync():
            seed_catalog(session)
    """
    try:
        factory = get_session_factory()
    except DatabaseNotConfiguredError as e:
        raise RuntimeError(f"Database not configured: {e}")

    session = factory()
    try:
        yield session
    finally:
        session.close()
