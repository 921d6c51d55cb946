"""
Tests for reference data seeding, demo data generation and test data cleanup.
"""

import pytest

from github_dashboard.config.catalog import CatalogLoader, get_catalog_loader
from github_dashboard.models.activity_type import ActivityType
from github_dashboard.models.client import Client
from github_dashboard.models.dashboard import Dashboard
from github_dashboard.models.github_user import GithubUser
from github_dashboard.models.tier_type import TierType
from github_dashboard.services.catalog_seed import seed_catalog
from github_dashboard.services.client_service import ClientService
from github_dashboard.services.demo_data import (
    DemoDataError,
    generate_demo_data,
    DEMO_CLIENT_NAME,
)
from github_dashboard.services.test_data_cleanup import cleanup_test_data


class TestCatalogLoader:

    def test_bundled_catalog(self):
        catalog = get_catalog_loader()

        assert [a["name"] for a in catalog.activity_types] == [
            "prs_opened", "prs_merged", "pr_reviews", "commits", "issues",
        ]
        assert {d["code"] for d in catalog.dashboard_types} == {
            "user_activity", "team_overview", "project_focus",
        }
        assert {t["code"] for t in catalog.tier_types} == {"basic", "premium"}

    def test_custom_file(self, make_yaml_config):
        path = make_yaml_config("catalog.yml", {
            "activity_types": [{"name": "deployments", "display_name": "Deployments"}],
        })

        catalog = CatalogLoader(path)

        assert catalog.activity_types == [{"name": "deployments", "display_name": "Deployments"}]
        assert catalog.tier_types == []

    def test_missing_file(self, temp_config_dir):
        with pytest.raises(FileNotFoundError):
            CatalogLoader(temp_config_dir / "missing.yml")


class TestSeedCatalog:

    def test_seed_creates_rows(self, db_session):
        result = seed_catalog(db_session)

        assert result.created["activity_type"] == 5
        assert result.created["dashboard_type"] == 3
        assert result.created["feature"] == 4
        assert result.created["tier_type"] == 2
        assert db_session.query(ActivityType).count() == 5

    def test_reseed_is_idempotent(self, seeded_catalog):
        result = seed_catalog(seeded_catalog)

        assert result.total_created == 0
        assert result.updated["activity_type"] == 5
        assert seeded_catalog.query(ActivityType).count() == 5
        assert seeded_catalog.query(TierType).count() == 2

    def test_premium_entitlements(self, seeded_catalog):
        clients = ClientService(seeded_catalog)
        premium = clients.catalog.get_tier_type_by_code("premium")
        basic = clients.catalog.get_tier_type_by_code("basic")

        rich = clients.create_client(name="Rich", tier_type_id=premium.id)
        plain = clients.create_client(name="Plain", tier_type_id=basic.id)

        assert clients.get_feature_codes(rich.id) == ["export", "premium_styles", "summary", "type_chips"]
        assert clients.get_feature_codes(plain.id) == []

    def test_reseed_reconciles_entitlements(self, seeded_catalog, make_yaml_config):
        path = make_yaml_config("catalog.yml", {
            "features": [{"code": "export", "name": "Export"}, {"code": "summary", "name": "Summary"}],
            "tier_types": [{"code": "premium", "name": "Premium", "features": ["summary", "unknown"]}],
        })

        seed_catalog(seeded_catalog, CatalogLoader(path))

        clients = ClientService(seeded_catalog)
        premium = clients.catalog.get_tier_type_by_code("premium")
        client = clients.create_client(name="Rich", tier_type_id=premium.id)
        assert clients.get_feature_codes(client.id) == ["summary"]

    def test_display_fields_refreshed(self, seeded_catalog, make_yaml_config):
        path = make_yaml_config("catalog.yml", {
            "activity_types": [{"name": "commits", "display_name": "Pushed Commits"}],
        })

        seed_catalog(seeded_catalog, CatalogLoader(path))

        commits = seeded_catalog.query(ActivityType).filter_by(name="commits").one()
        assert commits.display_name == "Pushed Commits"


class TestDemoData:

    def test_requires_catalog(self, db_session):
        with pytest.raises(DemoDataError):
            generate_demo_data(db_session)

    def test_generate(self, seeded_catalog):
        result = generate_demo_data(seeded_catalog, user_count=5, dashboard_count=3)

        assert result.users_created == 5
        assert result.dashboards_created == 3
        assert result.links_created == 9

        dashboard = seeded_catalog.query(Dashboard).filter_by(slug="dashboard-2").one()
        assert dashboard.client.name == DEMO_CLIENT_NAME
        assert dashboard.client.tier_type.code == "basic"
        assert len(dashboard.user_links) == 3

    def test_rerun_creates_nothing(self, seeded_catalog):
        generate_demo_data(seeded_catalog, user_count=5, dashboard_count=3)
        result = generate_demo_data(seeded_catalog, user_count=5, dashboard_count=3)

        assert (result.users_created, result.dashboards_created, result.links_created) == (0, 0, 0)
        assert seeded_catalog.query(Client).count() == 1


class TestCleanupTestData:

    def test_removes_generated_rows_only(self, seeded_catalog):
        generate_demo_data(seeded_catalog, user_count=5, dashboard_count=3)
        keep_user = GithubUser(github_user_id="583231", github_username="octocat")
        seeded_catalog.add(keep_user)
        seeded_catalog.add(Dashboard(name="Test Dashboard 42", slug="test-dashboard-42"))
        seeded_catalog.add(Dashboard(name="Production", slug="production"))
        seeded_catalog.commit()

        report = cleanup_test_data(seeded_catalog)

        assert report.ok
        assert report.dashboards_deleted == 4
        assert report.users_deleted == 5
        assert [d.slug for d in seeded_catalog.query(Dashboard).all()] == ["production"]
        assert [u.github_username for u in seeded_catalog.query(GithubUser).all()] == ["octocat"]

    def test_nothing_to_clean(self, seeded_catalog):
        report = cleanup_test_data(seeded_catalog)
        assert report.ok
        assert report.dashboards_deleted == 0
