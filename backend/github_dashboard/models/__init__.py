"""
Database models for clients, dashboards and tracked GitHub entities.
"""

from github_dashboard.models.base import TimestampMixin, generate_uuid, as_utc
from github_dashboard.models.tier_type import TierType, Feature, TierTypeFeature
from github_dashboard.models.client import Client
from github_dashboard.models.dashboard_type import DashboardType, DashboardTypeCode
from github_dashboard.models.dashboard import Dashboard
from github_dashboard.models.github_user import GithubUser
from github_dashboard.models.dashboard_github_user import DashboardGithubUser
from github_dashboard.models.dashboard_repository import DashboardRepository
from github_dashboard.models.activity_type import ActivityType
from github_dashboard.models.dashboard_activity_config import DashboardActivityConfig

__all__ = [
    "TimestampMixin",
    "generate_uuid",
    "as_utc",
    "TierType",
    "Feature",
    "TierTypeFeature",
    "Client",
    "DashboardType",
    "DashboardTypeCode",
    "Dashboard",
    "GithubUser",
    "DashboardGithubUser",
    "DashboardRepository",
    "ActivityType",
    "DashboardActivityConfig",
]
