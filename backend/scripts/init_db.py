"""
Database initialization script.

Creates all tables defined in the SQLAlchemy models if they don't exist.
Existing tables are not modified (use Alembic migrations for schema changes).

Usage:
    python backend/scripts/init_db.py

Environment variables:
    DATABASE_URL: PostgreSQL connection string (required)
"""

import sys
import logging
from pathlib import Path

backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from sqlalchemy.exc import SQLAlchemyError

from github_dashboard.db_base import Base
from github_dashboard.database.session import get_engine
import github_dashboard.models  # noqa: F401 - registers tables with Base.metadata

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main() -> int:
    try:
        engine = get_engine()
        Base.metadata.create_all(bind=engine)
    except (ValueError, SQLAlchemyError) as e:
        logger.error("Database initialization failed", extra={"error": str(e)})
        return 1

    logger.info("Database initialized", extra={"tables": sorted(Base.metadata.tables)})
    return 0


if __name__ == "__main__":
    sys.exit(main())
