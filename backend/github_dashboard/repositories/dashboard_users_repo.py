"""
Dashboard membership repository (dashboard_github_user junction).
"""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import joinedload

from github_dashboard.models.dashboard_github_user import DashboardGithubUser
from github_dashboard.models.github_user import GithubUser
from github_dashboard.repositories.base_repo import BaseRepository


class DashboardUsersRepository(BaseRepository[DashboardGithubUser]):

    def _get_model_class(self):
        return DashboardGithubUser

    def get_link(self, dashboard_id: str, github_user_pk: str) -> Optional[DashboardGithubUser]:
        return (
            self._query()
            .filter(
                DashboardGithubUser.dashboard_id == dashboard_id,
                DashboardGithubUser.github_user_id == github_user_pk,
            )
            .first()
        )

    def get_link_by_username(self, dashboard_id: str, username: str) -> Optional[DashboardGithubUser]:
        return (
            self._query()
            .join(GithubUser, GithubUser.id == DashboardGithubUser.github_user_id)
            .filter(
                DashboardGithubUser.dashboard_id == dashboard_id,
                func.lower(GithubUser.github_username) == username.lower(),
            )
            .first()
        )

    def list_for_dashboard(self, dashboard_id: str) -> List[DashboardGithubUser]:
        return (
            self._query()
            .options(joinedload(DashboardGithubUser.github_user))
            .filter(DashboardGithubUser.dashboard_id == dashboard_id)
            .order_by(DashboardGithubUser.added_at.asc())
            .all()
        )
