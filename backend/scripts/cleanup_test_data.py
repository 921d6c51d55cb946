"""
Test data cleanup script.

Deletes dashboards named "Test Dashboard ..." / "Dashboard ..." and
github_user* accounts left behind by end-to-end runs or demo data.

Usage:
    python backend/scripts/cleanup_test_data.py

Environment variables:
    DATABASE_URL: PostgreSQL connection string (required)
"""

import sys
import logging
from pathlib import Path

backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from github_dashboard.database.session import get_db_session_sync
from github_dashboard.services.test_data_cleanup import cleanup_test_data

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main() -> int:
    try:
        for session in get_db_session_sync():
            report = cleanup_test_data(session)
    except RuntimeError as e:
        logger.error("Cleanup could not start: %s", e)
        return 1

    logger.info(
        "Cleanup finished: %d dashboards, %d users deleted",
        report.dashboards_deleted,
        report.users_deleted,
    )
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
