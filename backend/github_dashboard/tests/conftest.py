"""
Root test configuration and fixtures.

Provides database fixtures that can be used by all tests.
E2E tests have additional fixtures in e2e/conftest.py.

Shared fixtures:
- db_session: per-test session rolled back after the test
- seeded_catalog: db_session with activity/dashboard/tier catalogs loaded
- fake_github: GitHubClient stand-in with AsyncMock lookups
- api_client: TestClient wired to db_session and fake_github
- make_yaml_config: factory for catalog YAML files in a temp dir
"""

import os
import tempfile
import pytest
import yaml
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Set test environment
os.environ.setdefault("ENV", "test")


def _get_test_database_url() -> str:
    """Get database URL for tests."""
    from github_dashboard.config.settings import normalize_database_url

    database_url = normalize_database_url(os.getenv("DATABASE_URL"))
    if database_url:
        return database_url

    # Default to SQLite for unit tests if no PostgreSQL available
    return "sqlite:///:memory:"


def _is_postgres() -> bool:
    """Check if using PostgreSQL."""
    url = _get_test_database_url()
    return url.startswith("postgresql")


@pytest.fixture(scope="session")
def db_engine():
    """
    Create database engine for tests.

    Uses PostgreSQL if DATABASE_URL is set, otherwise SQLite in-memory.
    """
    database_url = _get_test_database_url()

    if _is_postgres():
        try:
            engine = create_engine(database_url, pool_pre_ping=True)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            pytest.skip(
                f"PostgreSQL not available. Set DATABASE_URL or use SQLite. Error: {e}"
            )
    else:
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    from github_dashboard.db_base import Base
    import github_dashboard.models  # noqa: F401 - registers all tables

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """
    Create database session with transaction rollback for test isolation.

    Each test gets a fresh session that rolls back after the test completes.
    """
    connection = db_engine.connect()
    transaction = connection.begin()

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=connection)
    session = SessionLocal()

    if _is_postgres():
        nested = connection.begin_nested()

        @event.listens_for(session, "after_transaction_end")
        def restart_savepoint(session, transaction):
            nonlocal nested
            if transaction.nested and not transaction._parent.nested:
                nested = connection.begin_nested()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def seeded_catalog(db_session):
    """db_session with the bundled catalog seeded."""
    from github_dashboard.services.catalog_seed import seed_catalog

    seed_catalog(db_session)
    return db_session


# =============================================================================
# GitHub
# =============================================================================

OCTOCAT_ID = 583231
HELLO_WORLD_REPO_ID = 1296269


@pytest.fixture
def fake_github():
    """GitHubClient double resolving octocat and octocat/Hello-World."""
    from github_dashboard.integrations.github.client import GitHubClient
    from github_dashboard.integrations.github.models import GitHubUser, GitHubRepository

    client = MagicMock(spec=GitHubClient)
    client.get_user = AsyncMock(return_value=GitHubUser(
        id=OCTOCAT_ID,
        login="octocat",
        name="The Octocat",
        avatar_url="https://avatars.githubusercontent.com/u/583231",
        html_url="https://github.com/octocat",
    ))
    client.get_repository = AsyncMock(return_value=GitHubRepository(
        id=HELLO_WORLD_REPO_ID,
        name="Hello-World",
        full_name="octocat/Hello-World",
        owner_login="octocat",
        html_url="https://github.com/octocat/Hello-World",
    ))
    return client


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture
def api_client(db_session, fake_github):
    """TestClient for the full app with DB and GitHub dependencies overridden."""
    from fastapi.testclient import TestClient

    from main import app
    from github_dashboard.api.dependencies.github import get_github_client
    from github_dashboard.database.session import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session
    app.dependency_overrides[get_github_client] = lambda: fake_github
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: mark test as end-to-end test")


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def temp_config_dir():
    """Create a temporary directory for YAML config files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_yaml_config(temp_config_dir):
    """
    Factory fixture that writes a YAML config file and returns its path.

    Usage:
        config_path = make_yaml_config("catalog.yml", {"activity_types": [...]})
    """
    def _make(filename: str, config: dict) -> Path:
        config_path = temp_config_dir / filename
        with open(config_path, "w") as f:
            yaml.dump(config, f)
        return config_path
    return _make
