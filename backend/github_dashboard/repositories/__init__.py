"""Repositories wrapping SQLAlchemy queries per entity."""

from github_dashboard.repositories.base_repo import BaseRepository
from github_dashboard.repositories.dashboards_repo import DashboardsRepository
from github_dashboard.repositories.github_users_repo import GithubUsersRepository
from github_dashboard.repositories.dashboard_users_repo import DashboardUsersRepository
from github_dashboard.repositories.dashboard_repos_repo import DashboardReposRepository
from github_dashboard.repositories.activity_types_repo import ActivityTypesRepository
from github_dashboard.repositories.activity_configs_repo import ActivityConfigsRepository
from github_dashboard.repositories.clients_repo import ClientsRepository
from github_dashboard.repositories.catalog_repo import CatalogRepository

__all__ = [
    "BaseRepository",
    "DashboardsRepository",
    "GithubUsersRepository",
    "DashboardUsersRepository",
    "DashboardReposRepository",
    "ActivityTypesRepository",
    "ActivityConfigsRepository",
    "ClientsRepository",
    "CatalogRepository",
]
