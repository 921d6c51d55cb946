"""Database session management."""

from github_dashboard.database.session import (
    DatabaseNotConfiguredError,
    get_database_url,
    get_engine,
    get_session_factory,
    get_db_session,
    get_db_session_sync,
    reset_engine,
)

__all__ = [
    "DatabaseNotConfiguredError",
    "get_database_url",
    "get_engine",
    "get_session_factory",
    "get_db_session",
    "get_db_session_sync",
    "reset_engine",
]
