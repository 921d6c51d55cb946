"""
Tests for DashboardService.

Covers:
- Dashboard CRUD with slug derivation and conflicts
- GitHub user membership (GitHub lookups mocked)
- Repository attachment and removal
- Activity configuration defaults, upserts and unknown activity types
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import httpx
from sqlalchemy.exc import IntegrityError

from github_dashboard.integrations.github.client import GitHubClient
from github_dashboard.integrations.github.exceptions import (
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from github_dashboard.models.dashboard_activity_config import DashboardActivityConfig
from github_dashboard.models.dashboard_github_user import DashboardGithubUser
from github_dashboard.models.dashboard_repository import DashboardRepository
from github_dashboard.models.github_user import GithubUser
from github_dashboard.services.client_service import ClientService
from github_dashboard.services.dashboard_service import (
    DashboardService,
    ActivityConfigUpdate,
    DashboardNotFoundError,
    DashboardConflictError,
    InvalidDashboardNameError,
    ReferencedEntityNotFoundError,
    DashboardUserNotFoundError,
    DashboardUserConflictError,
    DashboardRepositoryNotFoundError,
    DashboardRepositoryConflictError,
    format_timestamp,
    parse_repository_name,
)

OCTOCAT_ID = 583231
HELLO_WORLD_REPO_ID = 1296269


@pytest.fixture
def service(seeded_catalog, fake_github):
    return DashboardService(seeded_catalog, fake_github)


@pytest.fixture
def dashboard(service):
    return service.create_dashboard(name="Demo")


# =============================================================================
# Dashboards
# =============================================================================


class TestCreateDashboard:

    def test_create_derives_slug_and_defaults_public(self, service):
        dashboard = service.create_dashboard(name="Platform Team", description="Weekly view")

        assert dashboard.id is not None
        assert dashboard.slug == "platform-team"
        assert dashboard.is_public is True
        assert dashboard.description == "Weekly view"

    def test_create_private(self, service):
        dashboard = service.create_dashboard(name="Secret", is_public=False)
        assert dashboard.is_public is False

    def test_second_dashboard_with_same_slug_conflicts(self, service):
        service.create_dashboard(name="Demo Board")

        with pytest.raises(DashboardConflictError):
            service.create_dashboard(name="demo board!!")

    def test_name_without_slug_characters_rejected(self, service):
        with pytest.raises(InvalidDashboardNameError):
            service.create_dashboard(name="!!!")

    def test_unknown_client_rejected(self, service):
        with pytest.raises(ReferencedEntityNotFoundError):
            service.create_dashboard(name="Orphan", client_id="missing-client")

    def test_unknown_dashboard_type_rejected(self, service):
        with pytest.raises(ReferencedEntityNotFoundError):
            service.create_dashboard(name="Orphan", dashboard_type_id="missing-type")

    def test_create_with_client_and_type(self, service, seeded_catalog):
        clients = ClientService(seeded_catalog)
        tier = clients.catalog.get_tier_type_by_code("basic")
        client = clients.create_client(name="Acme", tier_type_id=tier.id)
        team_type = clients.catalog.get_dashboard_type_by_code("team_overview")

        dashboard = service.create_dashboard(
            name="Acme Team",
            client_id=client.id,
            dashboard_type_id=team_type.id,
        )

        assert dashboard.client_id == client.id
        assert dashboard.dashboard_type.code == "team_overview"


class TestReadDashboards:

    def test_get_by_slug_includes_members(self, service, dashboard):
        summary = service.get_dashboard_by_slug("demo")

        assert summary.dashboard.id == dashboard.id
        assert summary.github_users == []
        assert summary.user_count == 0

    def test_get_by_unknown_slug(self, service):
        with pytest.raises(DashboardNotFoundError):
            service.get_dashboard_by_slug("nope")

    def test_list_public_excludes_private(self, service):
        service.create_dashboard(name="Open")
        service.create_dashboard(name="Closed", is_public=False)

        slugs = [s.dashboard.slug for s in service.list_public_dashboards()]

        assert "open" in slugs
        assert "closed" not in slugs

    @pytest.mark.asyncio
    async def test_list_public_counts_members(self, service, dashboard):
        await service.add_user(dashboard.id, "octocat")

        summaries = {s.dashboard.slug: s for s in service.list_public_dashboards()}

        assert summaries["demo"].user_count == 1
        assert summaries["demo"].github_users == ["octocat"]


class TestUpdateDashboard:

    def test_rename_regenerates_slug(self, service, dashboard):
        updated = service.update_dashboard(dashboard.id, {"name": "Demo Reloaded"})

        assert updated.name == "Demo Reloaded"
        assert updated.slug == "demo-reloaded"

    def test_non_name_update_keeps_slug(self, service, dashboard):
        updated = service.update_dashboard(dashboard.id, {"description": "new", "is_public": False})

        assert updated.slug == "demo"
        assert updated.description == "new"
        assert updated.is_public is False

    def test_same_name_keeps_slug(self, service, dashboard):
        updated = service.update_dashboard(dashboard.id, {"name": "Demo"})
        assert updated.slug == "demo"

    def test_rename_onto_existing_slug_conflicts(self, service, dashboard):
        other = service.create_dashboard(name="Other")

        with pytest.raises(DashboardConflictError):
            service.update_dashboard(other.id, {"name": "DEMO"})

    def test_update_missing_dashboard(self, service):
        with pytest.raises(DashboardNotFoundError):
            service.update_dashboard("missing", {"name": "x"})


class TestDeleteDashboard:

    @pytest.mark.asyncio
    async def test_delete_cascades(self, service, dashboard, seeded_catalog):
        dashboard_id = dashboard.id
        await service.add_user(dashboard_id, "octocat")
        await service.add_repository(dashboard_id, "octocat/Hello-World")
        service.update_activity_configuration(
            dashboard_id,
            [ActivityConfigUpdate(activity_type_name="commits", enabled=True)],
        )

        service.delete_dashboard(dashboard_id)

        db = seeded_catalog
        assert db.query(DashboardGithubUser).filter_by(dashboard_id=dashboard_id).count() == 0
        assert db.query(DashboardRepository).filter_by(dashboard_id=dashboard_id).count() == 0
        assert db.query(DashboardActivityConfig).filter_by(dashboard_id=dashboard_id).count() == 0
        # The GitHub profile itself survives
        assert db.query(GithubUser).filter_by(github_username="octocat").count() == 1

        with pytest.raises(DashboardNotFoundError):
            service.get_dashboard(dashboard_id)

    def test_delete_missing(self, service):
        with pytest.raises(DashboardNotFoundError):
            service.delete_dashboard("missing")


# =============================================================================
# GitHub users
# =============================================================================


class TestDashboardUsers:

    @pytest.mark.asyncio
    async def test_add_user_stores_profile(self, service, dashboard, fake_github):
        link = await service.add_user(dashboard.id, "octocat")

        fake_github.get_user.assert_awaited_once_with("octocat")
        assert link.dashboard_id == dashboard.id
        assert link.github_user.github_user_id == str(OCTOCAT_ID)
        assert link.github_user.display_name == "The Octocat"
        assert link.github_user.profile_url == "https://github.com/octocat"

    @pytest.mark.asyncio
    async def test_display_name_override(self, service, dashboard):
        link = await service.add_user(dashboard.id, "octocat", display_name="Mona")
        assert link.github_user.display_name == "Mona"

    @pytest.mark.asyncio
    async def test_add_same_user_twice_conflicts(self, service, dashboard, fake_github):
        await service.add_user(dashboard.id, "octocat")

        with pytest.raises(DashboardUserConflictError):
            await service.add_user(dashboard.id, "OctoCat")

        assert fake_github.get_user.await_count == 1

    @pytest.mark.asyncio
    async def test_same_user_in_two_dashboards_shares_profile(self, service, dashboard, seeded_catalog):
        other = service.create_dashboard(name="Other")

        await service.add_user(dashboard.id, "octocat")
        await service.add_user(other.id, "octocat")

        assert seeded_catalog.query(GithubUser).filter_by(github_user_id=str(OCTOCAT_ID)).count() == 1

    @pytest.mark.asyncio
    async def test_unknown_github_user_propagates(self, service, dashboard, fake_github):
        fake_github.get_user.side_effect = GitHubNotFoundError()

        with pytest.raises(GitHubNotFoundError):
            await service.add_user(dashboard.id, "ghost")

        assert service.list_users(dashboard.id) == []

    @pytest.mark.asyncio
    async def test_add_user_to_missing_dashboard(self, service, fake_github):
        with pytest.raises(DashboardNotFoundError):
            await service.add_user("missing", "octocat")
        fake_github.get_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remove_user(self, service, dashboard):
        await service.add_user(dashboard.id, "octocat")

        service.remove_user(dashboard.id, "octocat")

        assert service.list_users(dashboard.id) == []

    def test_remove_absent_user_not_found(self, service, dashboard):
        with pytest.raises(DashboardUserNotFoundError):
            service.remove_user(dashboard.id, "ghost")


# =============================================================================
# Repositories
# =============================================================================


class TestParseRepositoryName:

    def test_valid(self):
        assert parse_repository_name("octocat/Hello-World") == ("octocat", "Hello-World")

    def test_dots_and_underscores_allowed(self):
        assert parse_repository_name(" my_org/repo.js ") == ("my_org", "repo.js")

    @pytest.mark.parametrize("value", [
        "octocat", "octocat/", "/repo", "a/b/c", " / ",
        "../x", "octocat/..", "octo cat/repo", "octocat/repo?ref=main",
    ])
    def test_invalid_is_conflict(self, value):
        with pytest.raises(DashboardRepositoryConflictError):
            parse_repository_name(value)


class TestDashboardRepositories:

    @pytest.mark.asyncio
    async def test_add_repository_resolves_id(self, service, dashboard, fake_github):
        link = await service.add_repository(dashboard.id, "octocat/Hello-World")

        fake_github.get_repository.assert_awaited_once_with("octocat", "Hello-World")
        assert link.github_repo_id == HELLO_WORLD_REPO_ID
        assert link.owner == "octocat"
        assert link.name == "Hello-World"
        assert link.full_name == "octocat/Hello-World"

        repos = service.list_repositories(dashboard.id)
        assert [r.github_repo_id for r in repos] == [HELLO_WORLD_REPO_ID]

    @pytest.mark.asyncio
    async def test_duplicate_repository_conflicts(self, service, dashboard):
        await service.add_repository(dashboard.id, "octocat/Hello-World")

        with pytest.raises(DashboardRepositoryConflictError):
            await service.add_repository(dashboard.id, "octocat/hello-world")

    @pytest.mark.asyncio
    async def test_renamed_repository_conflicts_on_id(self, service, dashboard):
        await service.add_repository(dashboard.id, "octocat/Hello-World")

        # Different name, same GitHub id from the lookup
        with pytest.raises(DashboardRepositoryConflictError):
            await service.add_repository(dashboard.id, "octocat/Hello-World-Renamed")

    @pytest.mark.asyncio
    async def test_invalid_format_conflicts_without_lookup(self, service, dashboard, fake_github):
        with pytest.raises(DashboardRepositoryConflictError):
            await service.add_repository(dashboard.id, "not-a-repo")
        fake_github.get_repository.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lookup_failure_is_conflict(self, service, dashboard, fake_github):
        fake_github.get_repository.side_effect = GitHubRateLimitError()

        with pytest.raises(DashboardRepositoryConflictError, match="Failed to fetch repository information"):
            await service.add_repository(dashboard.id, "octocat/Hello-World")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(200, text="<html>unicorn</html>"),
        httpx.Response(200, json={}),
        httpx.Response(200, json={"id": None, "name": "Hello-World"}),
    ])
    async def test_malformed_github_body_is_conflict(self, seeded_catalog, response, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        github = GitHubClient(base_url="https://api.github.test")
        service = DashboardService(seeded_catalog, github)
        dashboard = service.create_dashboard(name="Malformed")

        with patch.object(github._client, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = response

            with pytest.raises(DashboardRepositoryConflictError, match="Failed to fetch repository information"):
                await service.add_repository(dashboard.id, "octocat/Hello-World")

        assert service.list_repositories(dashboard.id) == []
        assert seeded_catalog.query(DashboardRepository).filter_by(github_repo_id=0).count() == 0

    @pytest.mark.asyncio
    async def test_remove_repository(self, service, dashboard):
        await service.add_repository(dashboard.id, "octocat/Hello-World")

        service.remove_repository(dashboard.id, "octocat/Hello-World")

        assert service.list_repositories(dashboard.id) == []

    def test_remove_absent_repository(self, service, dashboard):
        with pytest.raises(DashboardRepositoryNotFoundError):
            service.remove_repository(dashboard.id, "octocat/Spoon-Knife")


# =============================================================================
# Activity configuration
# =============================================================================


class TestActivityConfiguration:

    def test_defaults_without_rows(self, service, dashboard):
        config = service.get_activity_configuration(dashboard.id)

        assert config.track_prs_created is True
        assert config.track_prs_merged is True
        assert config.track_pr_reviews is True
        assert config.track_commits is False
        assert config.track_issues is False
        assert config.date_range_start == ""
        assert config.date_range_end == ""

    def test_enable_commits(self, service, dashboard):
        config = service.update_activity_configuration(
            dashboard.id,
            [ActivityConfigUpdate(activity_type_name="commits", enabled=True)],
        )

        assert config.track_commits is True
        assert config.track_issues is False
        assert config.track_prs_created is True

    def test_unknown_activity_type_dropped(self, service, dashboard, seeded_catalog):
        config = service.update_activity_configuration(
            dashboard.id,
            [
                ActivityConfigUpdate(activity_type_name="stars", enabled=True),
                ActivityConfigUpdate(activity_type_name="pr_reviews", enabled=False),
            ],
        )

        assert config.track_pr_reviews is False
        rows = seeded_catalog.query(DashboardActivityConfig).filter_by(dashboard_id=dashboard.id).all()
        assert len(rows) == 1

    def test_repeated_writes_update_in_place(self, service, dashboard, seeded_catalog):
        service.update_activity_configuration(
            dashboard.id, [ActivityConfigUpdate(activity_type_name="issues", enabled=True)]
        )
        config = service.update_activity_configuration(
            dashboard.id, [ActivityConfigUpdate(activity_type_name="issues", enabled=False)]
        )

        assert config.track_issues is False
        assert seeded_catalog.query(DashboardActivityConfig).filter_by(dashboard_id=dashboard.id).count() == 1

    def test_writes_leave_other_rows_untouched(self, service, dashboard):
        service.update_activity_configuration(
            dashboard.id, [ActivityConfigUpdate(activity_type_name="prs_merged", enabled=False)]
        )
        config = service.update_activity_configuration(
            dashboard.id, [ActivityConfigUpdate(activity_type_name="commits", enabled=True)]
        )

        assert config.track_prs_merged is False
        assert config.track_commits is True

    def test_date_range_comes_from_prs_opened(self, service, dashboard):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        end = datetime(2024, 1, 31, 23, 59, 59, tzinfo=timezone.utc)

        config = service.update_activity_configuration(
            dashboard.id,
            [
                ActivityConfigUpdate("prs_opened", True, start, end),
                ActivityConfigUpdate("commits", True, datetime(2023, 6, 1, tzinfo=timezone.utc), None),
            ],
        )

        assert config.date_range_start == "2024-01-01T00:00:00.000Z"
        assert config.date_range_end == "2024-01-31T23:59:59.000Z"

    def test_failed_flush_rolls_back_and_reraises(self, service, dashboard, seeded_catalog):
        failure = IntegrityError("INSERT", {}, Exception("duplicate key"))

        with patch.object(seeded_catalog, "flush", side_effect=failure), \
                patch.object(seeded_catalog, "rollback") as rollback:
            with pytest.raises(IntegrityError):
                service.update_activity_configuration(
                    dashboard.id, [ActivityConfigUpdate(activity_type_name="issues", enabled=True)]
                )

        rollback.assert_called_once()

    def test_date_range_on_other_activity_is_not_shown(self, service, dashboard):
        config = service.update_activity_configuration(
            dashboard.id,
            [ActivityConfigUpdate("commits", True, datetime(2023, 6, 1, tzinfo=timezone.utc), None)],
        )

        assert config.date_range_start == ""

    def test_missing_dashboard(self, service):
        with pytest.raises(DashboardNotFoundError):
            service.get_activity_configuration("missing")

    def test_list_activity_types(self, service):
        names = {a.name for a in service.list_activity_types()}
        assert names == {"prs_opened", "prs_merged", "pr_reviews", "commits", "issues"}


class TestFormatTimestamp:

    def test_none(self):
        assert format_timestamp(None) == ""

    def test_naive_treated_as_utc(self):
        assert format_timestamp(datetime(2024, 5, 6, 7, 8, 9)) == "2024-05-06T07:08:09.000Z"
