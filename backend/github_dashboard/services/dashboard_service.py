"""
Dashboard Service - Business logic for dashboards.

Handles dashboard CRUD, GitHub user and repository membership, and the
per-dashboard activity configuration.

Key edge cases handled:
- Slug collisions on create and on rename (409 Conflict)
- Names that normalize to an empty slug (400)
- Duplicate members detected before and after the GitHub lookup
- Unknown activity type names in a configuration write are dropped
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Tuple

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from github_dashboard.integrations.github.client import GitHubClient
from github_dashboard.integrations.github.exceptions import GitHubError
from github_dashboard.models.activity_type import ActivityType
from github_dashboard.models.base import as_utc
from github_dashboard.models.dashboard import Dashboard
from github_dashboard.models.dashboard_github_user import DashboardGithubUser
from github_dashboard.models.dashboard_repository import DashboardRepository
from github_dashboard.repositories.activity_configs_repo import ActivityConfigsRepository
from github_dashboard.repositories.activity_types_repo import ActivityTypesRepository
from github_dashboard.repositories.catalog_repo import CatalogRepository
from github_dashboard.repositories.clients_repo import ClientsRepository
from github_dashboard.repositories.dashboard_repos_repo import DashboardReposRepository
from github_dashboard.repositories.dashboard_users_repo import DashboardUsersRepository
from github_dashboard.repositories.dashboards_repo import DashboardsRepository
from github_dashboard.repositories.github_users_repo import GithubUsersRepository
from github_dashboard.services.slug import generate_slug

logger = logging.getLogger(__name__)

PRS_OPENED = "prs_opened"
PRS_MERGED = "prs_merged"
PR_REVIEWS = "pr_reviews"
COMMITS = "commits"
ISSUES = "issues"

# (attribute, activity type name, default when no row exists)
ACTIVITY_TOGGLES: Tuple[Tuple[str, str, bool], ...] = (
    ("track_prs_created", PRS_OPENED, True),
    ("track_prs_merged", PRS_MERGED, True),
    ("track_pr_reviews", PR_REVIEWS, True),
    ("track_commits", COMMITS, False),
    ("track_issues", ISSUES, False),
)

# The shared date range is read from this activity's row only.
DATE_RANGE_SOURCE = PRS_OPENED

UPDATABLE_FIELDS = {"name", "description", "is_public", "client_id", "dashboard_type_id"}

REPO_SEGMENT = re.compile(r"^[A-Za-z0-9_.-]+$")


class DashboardNotFoundError(Exception):
    """Dashboard does not exist."""


class DashboardConflictError(Exception):
    """Another dashboard already uses the derived slug."""


class InvalidDashboardNameError(Exception):
    """Dashboard name has no characters usable in a slug."""


class ReferencedEntityNotFoundError(Exception):
    """A client or dashboard type id does not exist."""


class DashboardUserNotFoundError(Exception):
    """GitHub user is not linked to the dashboard."""


class DashboardUserConflictError(Exception):
    """GitHub user is already linked to the dashboard."""


class DashboardRepositoryNotFoundError(Exception):
    """Repository is not attached to the dashboard."""


class DashboardRepositoryConflictError(Exception):
    """Repository is already attached, malformed, or could not be resolved."""


@dataclass
class DashboardSummary:
    """A dashboard plus the logins of its linked GitHub users."""
    dashboard: Dashboard
    github_users: List[str] = field(default_factory=list)

    @property
    def user_count(self) -> int:
        return len(self.github_users)


@dataclass
class ActivityConfigUpdate:
    """One submitted (activity type, toggle, date range) tuple."""
    activity_type_name: str
    enabled: bool
    date_range_start: Optional[datetime] = None
    date_range_end: Optional[datetime] = None


@dataclass
class ActivityConfiguration:
    """Read projection of a dashboard's activity settings."""
    track_prs_created: bool = True
    track_prs_merged: bool = True
    track_pr_reviews: bool = True
    track_commits: bool = False
    track_issues: bool = False
    date_range_start: str = ""
    date_range_end: str = ""


def format_timestamp(value: Optional[datetime]) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix, or ''."""
    value = as_utc(value)
    if value is None:
        return ""
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_repository_name(full_name: str) -> Tuple[str, str]:
    """
    Split "owner/repo" into its parts.

    Raises:
        DashboardRepositoryConflictError: Unless exactly two segments made of
            letters, digits, ".", "-" and "_" (and not "." or "..")
    """
    parts = [part.strip() for part in full_name.strip().split("/")]
    if len(parts) != 2 or not all(_is_repo_segment(part) for part in parts):
        raise DashboardRepositoryConflictError(
            "Invalid repository format. Expected 'owner/repo'"
        )
    return parts[0], parts[1]


def _is_repo_segment(value: str) -> bool:
    return bool(REPO_SEGMENT.match(value)) and value not in (".", "..")


class DashboardService:
    """Service for dashboards, their members and activity settings."""

    def __init__(self, db: Session, github_client: Optional[GitHubClient] = None):
        self.db = db
        self.github_client = github_client
        self.dashboards = DashboardsRepository(db)
        self.github_users = GithubUsersRepository(db)
        self.dashboard_users = DashboardUsersRepository(db)
        self.dashboard_repos = DashboardReposRepository(db)
        self.activity_types = ActivityTypesRepository(db)
        self.activity_configs = ActivityConfigsRepository(db)
        self.clients = ClientsRepository(db)
        self.catalog = CatalogRepository(db)

    def _github(self) -> GitHubClient:
        if self.github_client is None:
            raise RuntimeError("GitHub client is not configured for DashboardService")
        return self.github_client

    # =========================================================================
    # Dashboards
    # =========================================================================

    def get_dashboard(self, dashboard_id: str) -> Dashboard:
        dashboard = self.dashboards.get_by_id(dashboard_id)
        if not dashboard:
            raise DashboardNotFoundError(f"Dashboard {dashboard_id} not found")
        return dashboard

    def list_public_dashboards(self, client_id: Optional[str] = None) -> List[DashboardSummary]:
        """Public dashboards, oldest first, each with its member logins."""
        dashboards = self.dashboards.list_public(client_id=client_id)
        usernames = self.dashboards.member_usernames([d.id for d in dashboards])
        return [
            DashboardSummary(dashboard=d, github_users=usernames.get(d.id, []))
            for d in dashboards
        ]

    def get_dashboard_by_slug(self, slug: str) -> DashboardSummary:
        dashboard = self.dashboards.get_by_slug(slug)
        if not dashboard:
            raise DashboardNotFoundError(f"Dashboard '{slug}' not found")
        usernames = self.dashboards.member_usernames([dashboard.id])
        return DashboardSummary(dashboard=dashboard, github_users=usernames.get(dashboard.id, []))

    def create_dashboard(
        self,
        name: str,
        description: Optional[str] = None,
        is_public: Optional[bool] = None,
        client_id: Optional[str] = None,
        dashboard_type_id: Optional[str] = None,
    ) -> Dashboard:
        """
        Create a dashboard with a slug derived from its name.

        Raises:
            InvalidDashboardNameError: If the name yields an empty slug
            DashboardConflictError: If the slug is already taken
            ReferencedEntityNotFoundError: If client or dashboard type is unknown
        """
        slug = self._slug_for(name)
        if self.dashboards.slug_taken(slug):
            raise DashboardConflictError(f"Dashboard with slug '{slug}' already exists")

        self._check_references(client_id=client_id, dashboard_type_id=dashboard_type_id)

        try:
            dashboard = self.dashboards.create({
                "name": name,
                "slug": slug,
                "description": description,
                "is_public": True if is_public is None else is_public,
                "client_id": client_id,
                "dashboard_type_id": dashboard_type_id,
            })
        except IntegrityError:
            raise DashboardConflictError(f"Dashboard with slug '{slug}' already exists")

        logger.info(
            "Dashboard created",
            extra={"dashboard_id": dashboard.id, "slug": slug, "client_id": client_id},
        )
        return dashboard

    def update_dashboard(self, dashboard_id: str, changes: dict) -> Dashboard:
        """
        Apply a partial update. Only keys present in changes are written.

        The slug is regenerated only when the name actually changes.
        """
        dashboard = self.get_dashboard(dashboard_id)
        values = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}

        if values.get("is_public", False) is None:
            values.pop("is_public")

        if "name" in values:
            if values["name"] is None:
                values.pop("name")
            elif values["name"] != dashboard.name:
                slug = self._slug_for(values["name"])
                if self.dashboards.slug_taken(slug, exclude_id=dashboard.id):
                    raise DashboardConflictError(f"Dashboard with slug '{slug}' already exists")
                values["slug"] = slug

        self._check_references(
            client_id=values.get("client_id"),
            dashboard_type_id=values.get("dashboard_type_id"),
        )

        if not values:
            return dashboard

        try:
            updated = self.dashboards.update(dashboard.id, values)
        except IntegrityError:
            raise DashboardConflictError("Dashboard slug already exists")

        logger.info(
            "Dashboard updated",
            extra={"dashboard_id": dashboard.id, "fields": sorted(values)},
        )
        return updated

    def delete_dashboard(self, dashboard_id: str) -> None:
        """Delete a dashboard together with its links and activity settings."""
        dashboard = self.get_dashboard(dashboard_id)
        self.dashboards.delete_entity(dashboard)
        logger.info("Dashboard deleted", extra={"dashboard_id": dashboard_id})

    def _slug_for(self, name: str) -> str:
        slug = generate_slug(name)
        if not slug:
            raise InvalidDashboardNameError(
                f"Dashboard name '{name}' must contain at least one letter or digit"
            )
        return slug

    def _check_references(
        self,
        client_id: Optional[str] = None,
        dashboard_type_id: Optional[str] = None,
    ) -> None:
        if client_id and not self.clients.exists(client_id):
            raise ReferencedEntityNotFoundError(f"Client {client_id} not found")
        if dashboard_type_id and not self.catalog.get_dashboard_type(dashboard_type_id):
            raise ReferencedEntityNotFoundError(f"Dashboard type {dashboard_type_id} not found")

    # =========================================================================
    # GitHub users
    # =========================================================================

    def list_users(self, dashboard_id: str) -> List[DashboardGithubUser]:
        self.get_dashboard(dashboard_id)
        return self.dashboard_users.list_for_dashboard(dashboard_id)

    async def add_user(
        self,
        dashboard_id: str,
        github_username: str,
        display_name: Optional[str] = None,
    ) -> DashboardGithubUser:
        """
        Resolve a GitHub login and link it to the dashboard.

        Raises:
            DashboardNotFoundError: If dashboard does not exist
            DashboardUserConflictError: If the user is already linked
            GitHubError: If the profile lookup fails
        """
        dashboard = self.get_dashboard(dashboard_id)

        if self.dashboard_users.get_link_by_username(dashboard.id, github_username):
            raise DashboardUserConflictError(
                f"User {github_username} is already in this dashboard"
            )

        profile = await self._github().get_user(github_username)

        user = self.github_users.upsert(
            github_user_id=str(profile.id),
            github_username=profile.login,
            display_name=display_name or profile.name or profile.login,
            avatar_url=profile.avatar_url,
            profile_url=profile.html_url,
        )

        # The login may have been renamed since the first check.
        if self.dashboard_users.get_link(dashboard.id, user.id):
            raise DashboardUserConflictError(
                f"User {profile.login} is already in this dashboard"
            )

        try:
            link = self.dashboard_users.create({
                "dashboard_id": dashboard.id,
                "github_user_id": user.id,
            })
        except IntegrityError:
            raise DashboardUserConflictError(f"User {profile.login} is already in this dashboard")

        logger.info(
            "GitHub user added to dashboard",
            extra={"dashboard_id": dashboard.id, "login": profile.login},
        )
        return link

    def remove_user(self, dashboard_id: str, github_username: str) -> None:
        dashboard = self.get_dashboard(dashboard_id)
        link = self.dashboard_users.get_link_by_username(dashboard.id, github_username)
        if not link:
            raise DashboardUserNotFoundError(
                f"User {github_username} is not in this dashboard"
            )
        self.dashboard_users.delete_entity(link)
        logger.info(
            "GitHub user removed from dashboard",
            extra={"dashboard_id": dashboard.id, "login": github_username},
        )

    # =========================================================================
    # Repositories
    # =========================================================================

    def list_repositories(self, dashboard_id: str) -> List[DashboardRepository]:
        self.get_dashboard(dashboard_id)
        return self.dashboard_repos.list_for_dashboard(dashboard_id)

    async def add_repository(self, dashboard_id: str, full_name: str) -> DashboardRepository:
        """
        Attach "owner/repo" to the dashboard after resolving its GitHub id.

        Raises:
            DashboardNotFoundError: If dashboard does not exist
            DashboardRepositoryConflictError: On bad format, duplicates, or
                any failure of the GitHub lookup
        """
        dashboard = self.get_dashboard(dashboard_id)
        owner, repo = parse_repository_name(full_name)
        normalized = f"{owner}/{repo}"

        if self.dashboard_repos.get_by_full_name(dashboard.id, normalized):
            raise DashboardRepositoryConflictError(
                f"Repository {normalized} is already in this dashboard"
            )

        try:
            info = await self._github().get_repository(owner, repo)
        except GitHubError as e:
            logger.warning(
                "GitHub repository lookup failed",
                extra={"dashboard_id": dashboard.id, "repository": normalized, "error": e.message},
            )
            raise DashboardRepositoryConflictError("Failed to fetch repository information") from e

        if self.dashboard_repos.get_by_github_id(dashboard.id, info.id):
            raise DashboardRepositoryConflictError(
                f"Repository {normalized} is already in this dashboard"
            )

        try:
            link = self.dashboard_repos.create({
                "dashboard_id": dashboard.id,
                "github_repo_id": info.id,
                "owner": owner,
                "name": repo,
                "full_name": normalized,
            })
        except IntegrityError:
            raise DashboardRepositoryConflictError(
                f"Repository {normalized} is already in this dashboard"
            )

        logger.info(
            "Repository added to dashboard",
            extra={"dashboard_id": dashboard.id, "repository": normalized, "repo_id": info.id},
        )
        return link

    def remove_repository(self, dashboard_id: str, full_name: str) -> None:
        dashboard = self.get_dashboard(dashboard_id)
        link = self.dashboard_repos.get_by_full_name(dashboard.id, full_name.strip())
        if not link:
            raise DashboardRepositoryNotFoundError(
                f"Repository {full_name} is not in this dashboard"
            )
        self.dashboard_repos.delete_entity(link)
        logger.info(
            "Repository removed from dashboard",
            extra={"dashboard_id": dashboard.id, "repository": full_name},
        )

    # =========================================================================
    # Activity configuration
    # =========================================================================

    def list_activity_types(self) -> List[ActivityType]:
        return self.activity_types.list_all()

    def get_activity_configuration(self, dashboard_id: str) -> ActivityConfiguration:
        """
        Project the sparse config rows onto the five activity toggles.

        Missing rows fall back to the defaults in ACTIVITY_TOGGLES.
        """
        self.get_dashboard(dashboard_id)

        catalog = {activity.id: activity.name for activity in self.activity_types.list_all()}
        by_name = {
            catalog[config.activity_type_id]: config
            for config in self.activity_configs.list_for_dashboard(dashboard_id)
            if config.activity_type_id in catalog
        }

        projection = ActivityConfiguration()
        for attribute, activity_name, default in ACTIVITY_TOGGLES:
            config = by_name.get(activity_name)
            setattr(projection, attribute, config.enabled if config else default)

        range_config = by_name.get(DATE_RANGE_SOURCE)
        if range_config:
            projection.date_range_start = format_timestamp(range_config.date_range_start)
            projection.date_range_end = format_timestamp(range_config.date_range_end)

        return projection

    def update_activity_configuration(
        self,
        dashboard_id: str,
        updates: List[ActivityConfigUpdate],
    ) -> ActivityConfiguration:
        """
        Upsert one row per recognized activity type and return the new projection.

        Tuples naming an unknown activity type are skipped.
        """
        self.get_dashboard(dashboard_id)
        ids_by_name = self.activity_types.ids_by_name()

        rows = []
        skipped = []
        for update in updates:
            activity_type_id = ids_by_name.get(update.activity_type_name)
            if activity_type_id is None:
                skipped.append(update.activity_type_name)
                continue
            rows.append({
                "activity_type_id": activity_type_id,
                "enabled": update.enabled,
                "date_range_start": as_utc(update.date_range_start),
                "date_range_end": as_utc(update.date_range_end),
            })

        if skipped:
            logger.info(
                "Ignoring unknown activity types",
                extra={"dashboard_id": dashboard_id, "activity_types": skipped},
            )

        if rows:
            self.activity_configs.upsert_many(dashboard_id, rows)

        return self.get_activity_configuration(dashboard_id)
