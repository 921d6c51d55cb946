"""
Demo data script.

Creates github_user_N users and "Dashboard N" dashboards spread across
existing clients and dashboard types. Run seed_catalog.py first.

Usage:
    python backend/scripts/generate_demo_data.py

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
from github_dashboard.services.demo_data import generate_demo_data, DemoDataError

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main() -> int:
    try:
        for session in get_db_session_sync():
            result = generate_demo_data(session)
    except (RuntimeError, SQLAlchemyError, DemoDataError) as e:
        logger.error("Demo data generation failed: %s", e)
        return 1

    logger.info(
        "Demo data ready: %d users, %d dashboards, %d memberships created",
        result.users_created,
        result.dashboards_created,
        result.links_created,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
