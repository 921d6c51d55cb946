"""
E2E Test Configuration and Fixtures.

Provides:
- e2e_api: full-app TestClient with the catalog seeded
- e2e_data: tracker for dashboards created during a test, torn down afterwards
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import List

import pytest

from github_dashboard.services.dashboard_service import DashboardService, DashboardNotFoundError
from github_dashboard.services.test_data_cleanup import cleanup_test_data

logger = logging.getLogger(__name__)


@dataclass
class DashboardTestData:
    """Ids of rows a test created, removed on teardown."""
    dashboard_ids: List[str] = field(default_factory=list)

    def track(self, dashboard: dict) -> dict:
        self.dashboard_ids.append(dashboard["id"])
        return dashboard

    @staticmethod
    def unique_name(prefix: str = "Test Dashboard") -> str:
        return f"{prefix} {uuid.uuid4().hex[:8]}"


@pytest.fixture
def e2e_api(api_client, seeded_catalog):
    return api_client


@pytest.fixture
def e2e_data(seeded_catalog):
    data = DashboardTestData()
    yield data

    service = DashboardService(seeded_catalog)
    for dashboard_id in data.dashboard_ids:
        try:
            service.delete_dashboard(dashboard_id)
        except DashboardNotFoundError:
            pass

    report = cleanup_test_data(seeded_catalog)
    if not report.ok:
        logger.warning("E2E cleanup incomplete", extra={"errors": report.errors})
