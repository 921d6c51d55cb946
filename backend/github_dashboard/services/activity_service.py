"""
Activity Service - per-user pull request totals for a dashboard.

Counts come from the dashboard's repositories over the prs_opened date
range (default: the last 30 days):
- prsCreated: the member's own pull requests opened in the window
- prsMerged: the member's own pull requests merged in the window
- prsReviewed: other authors' pull requests the member reviewed in the window

A repository that cannot be read is skipped. A member whose totals cannot
be computed is reported with zero counts rather than failing the response.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from github_dashboard.integrations.github.client import GitHubClient
from github_dashboard.integrations.github.exceptions import GitHubError
from github_dashboard.integrations.github.models import GitHubPullRequest, GitHubReview
from github_dashboard.models.base import as_utc
from github_dashboard.models.github_user import GithubUser
from github_dashboard.services.dashboard_layouts import UserActivitySummary
from github_dashboard.services.dashboard_service import (
    DATE_RANGE_SOURCE,
    DashboardService,
    parse_repository_name,
)

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30

RepoPulls = Tuple[str, str, List[GitHubPullRequest]]


@dataclass
class RepositoryPRStats:
    """Pull request counts for one user in one repository."""
    repository: str
    pr_count: int = 0
    open_count: int = 0
    closed_count: int = 0
    merged_count: int = 0


@dataclass
class UserPRStats:
    username: str
    total_prs: int = 0
    open_prs: int = 0
    closed_prs: int = 0
    merged_prs: int = 0
    repositories: List[RepositoryPRStats] = field(default_factory=list)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _within(value: Optional[datetime], start: datetime, end: datetime) -> bool:
    return value is not None and start <= value <= end


class ActivityService:
    """Aggregates GitHub pull request activity for dashboard members."""

    def __init__(
        self,
        db: Session,
        github_client: GitHubClient,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.dashboards = DashboardService(db, github_client)
        self.github_client = github_client
        self._clock = clock or _utc_now

    def activity_window(self, dashboard_id: str) -> Tuple[datetime, datetime]:
        """
        Resolve the (start, end) window from the prs_opened config row.

        A missing end means now; a missing start means DEFAULT_WINDOW_DAYS
        before the end.
        """
        start: Optional[datetime] = None
        end: Optional[datetime] = None
        for config in self.dashboards.activity_configs.list_for_dashboard(dashboard_id):
            if config.activity_type and config.activity_type.name == DATE_RANGE_SOURCE:
                start = as_utc(config.date_range_start)
                end = as_utc(config.date_range_end)
                break

        end = end or self._clock()
        start = start or end - timedelta(days=DEFAULT_WINDOW_DAYS)
        return start, end

    async def summarize_dashboard(
        self,
        dashboard_id: str,
        include_reviews: bool = True,
        users: Optional[List[str]] = None,
    ) -> Tuple[List[UserActivitySummary], datetime, datetime]:
        """
        Build one UserActivitySummary per dashboard member.

        Args:
            dashboard_id: Dashboard primary key
            include_reviews: When False, review lookups are skipped and
                prsReviewed stays 0
            users: Optional logins to restrict the result to

        Raises:
            DashboardNotFoundError: If dashboard does not exist
        """
        dashboard = self.dashboards.get_dashboard(dashboard_id)
        start, end = self.activity_window(dashboard.id)

        members = [link.github_user for link in self.dashboards.dashboard_users.list_for_dashboard(dashboard.id)]
        if users:
            wanted = {login.lower() for login in users}
            members = [m for m in members if m.github_username.lower() in wanted]

        pulls = await self._collect_pulls(dashboard.id, start, end)
        reviews: Dict[Tuple[str, str, int], List[GitHubReview]] = {}

        summaries = []
        for member in members:
            try:
                summary = await self._summarize_member(member, pulls, reviews, start, end, include_reviews)
            except GitHubError as e:
                logger.warning(
                    "Activity lookup failed for user",
                    extra={"dashboard_id": dashboard.id, "login": member.github_username, "error": e.message},
                )
                summary = self._empty_summary(member)
            summaries.append(summary)

        logger.info(
            "Dashboard activity computed",
            extra={
                "dashboard_id": dashboard.id,
                "user_count": len(summaries),
                "repository_count": len(pulls),
            },
        )
        return summaries, start, end

    async def _collect_pulls(self, dashboard_id: str, start: datetime, end: datetime) -> List[RepoPulls]:
        collected = []
        for link in self.dashboards.dashboard_repos.list_for_dashboard(dashboard_id):
            try:
                pulls = await self.github_client.list_pull_requests(link.owner, link.name)
            except GitHubError as e:
                logger.warning(
                    "Skipping repository in activity totals",
                    extra={"dashboard_id": dashboard_id, "repository": link.full_name, "error": e.message},
                )
                continue
            in_window = [
                pr for pr in pulls
                if _within(pr.created_at, start, end)
                or _within(pr.updated_at, start, end)
                or _within(pr.merged_at, start, end)
            ]
            collected.append((link.owner, link.name, in_window))
        return collected

    async def _summarize_member(
        self,
        member: GithubUser,
        pulls: List[RepoPulls],
        reviews: Dict[Tuple[str, str, int], List[GitHubReview]],
        start: datetime,
        end: datetime,
        include_reviews: bool,
    ) -> UserActivitySummary:
        summary = self._empty_summary(member)

        for owner, repo, repo_pulls in pulls:
            for pr in repo_pulls:
                if self._is_author(member, pr):
                    if _within(pr.created_at, start, end):
                        summary.prs_created += 1
                    if _within(pr.merged_at, start, end):
                        summary.prs_merged += 1
                    continue

                if not include_reviews:
                    continue

                key = (owner, repo, pr.number)
                if key not in reviews:
                    reviews[key] = await self.github_client.list_pull_request_reviews(owner, repo, pr.number)
                if any(
                    self._is_reviewer(member, review) and _within(review.submitted_at, start, end)
                    for review in reviews[key]
                ):
                    summary.prs_reviewed += 1

        summary.total_activity = summary.prs_created + summary.prs_reviewed + summary.prs_merged
        return summary

    @staticmethod
    def _empty_summary(member: GithubUser) -> UserActivitySummary:
        return UserActivitySummary(
            login=member.github_username,
            name=member.display_name,
            avatar_url=member.avatar_url,
        )

    @staticmethod
    def _matches(member: GithubUser, github_id: Optional[int], login: Optional[str]) -> bool:
        if github_id is not None and str(github_id) == member.github_user_id:
            return True
        return bool(login) and login.lower() == member.github_username.lower()

    def _is_author(self, member: GithubUser, pr: GitHubPullRequest) -> bool:
        return self._matches(member, pr.author_id, pr.author_login)

    def _is_reviewer(self, member: GithubUser, review: GitHubReview) -> bool:
        return self._matches(member, review.reviewer_id, review.reviewer_login)


# =============================================================================
# Ad-hoc stats
# =============================================================================

async def user_pr_stats(github_client: GitHubClient, username: str, repos: List[str]) -> UserPRStats:
    """
    Count one user's pull requests across "owner/repo" names.

    Repositories that cannot be read are left out of the result.

    Raises:
        DashboardRepositoryConflictError: If a name is not "owner/repo"
    """
    stats = UserPRStats(username=username)
    login = username.lower()

    for full_name in repos:
        owner, repo = parse_repository_name(full_name)
        try:
            pulls = await github_client.list_pull_requests(owner, repo)
        except GitHubError as e:
            logger.warning(
                "Skipping repository in PR stats",
                extra={"repository": full_name, "login": username, "error": e.message},
            )
            continue

        repo_stats = RepositoryPRStats(repository=f"{owner}/{repo}")
        for pr in pulls:
            if (pr.author_login or "").lower() != login:
                continue
            repo_stats.pr_count += 1
            if pr.is_merged:
                repo_stats.merged_count += 1
            elif pr.state == "open":
                repo_stats.open_count += 1
            else:
                repo_stats.closed_count += 1

        stats.repositories.append(repo_stats)
        stats.total_prs += repo_stats.pr_count
        stats.open_prs += repo_stats.open_count
        stats.closed_prs += repo_stats.closed_count
        stats.merged_prs += repo_stats.merged_count

    return stats
