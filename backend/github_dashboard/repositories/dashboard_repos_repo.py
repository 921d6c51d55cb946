"""
Repositories attached to dashboards (dashboard_repository table).
"""

from typing import List, Optional

from sqlalchemy import func

from github_dashboard.models.dashboard_repository import DashboardRepository
from github_dashboard.repositories.base_repo import BaseRepository


class DashboardReposRepository(BaseRepository[DashboardRepository]):

    def _get_model_class(self):
        return DashboardRepository

    def get_by_full_name(self, dashboard_id: str, full_name: str) -> Optional[DashboardRepository]:
        return (
            self._query()
            .filter(
                DashboardRepository.dashboard_id == dashboard_id,
                func.lower(DashboardRepository.full_name) == full_name.lower(),
            )
            .first()
        )

    def get_by_github_id(self, dashboard_id: str, github_repo_id: int) -> Optional[DashboardRepository]:
        return (
            self._query()
            .filter(
                DashboardRepository.dashboard_id == dashboard_id,
                DashboardRepository.github_repo_id == github_repo_id,
            )
            .first()
        )

    def list_for_dashboard(self, dashboard_id: str) -> List[DashboardRepository]:
        return (
            self._query()
            .filter(DashboardRepository.dashboard_id == dashboard_id)
            .order_by(DashboardRepository.added_at.asc(), DashboardRepository.full_name.asc())
            .all()
        )
