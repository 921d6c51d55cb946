"""
Catalog seed script.

Inserts or refreshes activity types, dashboard types, tiers and features
from github_dashboard/config/catalog.yml. Safe to run repeatedly.

Usage:
    python backend/scripts/seed_catalog.py

Environment variables:
    DATABASE_URL: PostgreSQL connection string (required)
"""

import sys
import logging
from pathlib import Path

backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from sqlalchemy.exc import SQLAlchemyError

from github_dashboard.database.session import get_db_session_sync
from github_dashboard.services.catalog_seed import seed_catalog

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main() -> int:
    try:
        for session in get_db_session_sync():
            result = seed_catalog(session)
    except (RuntimeError, SQLAlchemyError, FileNotFoundError) as e:
        logger.error("Catalog seed failed: %s", e)
        return 1

    logger.info("Catalog seed complete: created=%s updated=%s", result.created, result.updated)
    return 0


if __name__ == "__main__":
    sys.exit(main())
