"""
Dashboards repository.
"""

from collections import defaultdict
from typing import Dict, List, Optional

from github_dashboard.models.dashboard import Dashboard
from github_dashboard.models.dashboard_github_user import DashboardGithubUser
from github_dashboard.models.github_user import GithubUser
from github_dashboard.repositories.base_repo import BaseRepository


class DashboardsRepository(BaseRepository[Dashboard]):

    def _get_model_class(self):
        return Dashboard

    def get_by_slug(self, slug: str) -> Optional[Dashboard]:
        return self._query().filter(Dashboard.slug == slug).first()

    def slug_taken(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        """True if another dashboard already uses slug."""
        query = self._query().filter(Dashboard.slug == slug)
        if exclude_id:
            query = query.filter(Dashboard.id != exclude_id)
        return query.first() is not None

    def list_public(self, client_id: Optional[str] = None) -> List[Dashboard]:
        query = self._query().filter(Dashboard.is_public.is_(True))
        if client_id:
            query = query.filter(Dashboard.client_id == client_id)
        return query.order_by(Dashboard.created_at.asc(), Dashboard.name.asc()).all()

    def member_usernames(self, dashboard_ids: List[str]) -> Dict[str, List[str]]:
        """Map each dashboard id to the logins of its linked GitHub users."""
        if not dashboard_ids:
            return {}

        rows = (
            self.db_session.query(DashboardGithubUser.dashboard_id, GithubUser.github_username)
            .join(GithubUser, GithubUser.id == DashboardGithubUser.github_user_id)
            .filter(DashboardGithubUser.dashboard_id.in_(dashboard_ids))
            .order_by(DashboardGithubUser.added_at.asc(), GithubUser.github_username.asc())
            .all()
        )

        usernames: Dict[str, List[str]] = defaultdict(list)
        for dashboard_id, username in rows:
            usernames[dashboard_id].append(username)
        return dict(usernames)
