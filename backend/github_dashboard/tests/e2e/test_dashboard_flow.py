"""
End-to-end dashboard lifecycle through the HTTP API.

Walks the path an admin takes: pick a tier, create a client and a
dashboard, attach a repository and a user, enable activity types, render
the layout and finally delete the dashboard.
"""

import pytest

pytestmark = pytest.mark.e2e


class TestDashboardLifecycle:

    def test_full_lifecycle(self, e2e_api, e2e_data, fake_github):
        api = e2e_api

        # Client on the basic tier
        tiers = {t["code"]: t["id"] for t in api.get("/api/tier-types").json()}
        client = api.post("/api/clients", json={"name": "Octo Corp", "tierTypeId": tiers["basic"]}).json()
        assert api.get(f"/api/clients/{client['id']}/features").json()["features"] == []

        # Dashboard using the team overview layout
        types = {t["code"]: t["id"] for t in api.get("/api/dashboard-types").json()}
        response = api.post("/api/dashboards", json={
            "name": "Demo",
            "clientId": client["id"],
            "dashboardTypeId": types["team_overview"],
        })
        assert response.status_code == 201
        dashboard = e2e_data.track(response.json())
        assert dashboard["slug"] == "demo"
        assert dashboard["dashboardTypeCode"] == "team_overview"

        # Repository resolved through GitHub
        repos_url = f"/api/dashboards/{dashboard['id']}/repositories"
        repo = api.post(repos_url, json={"fullName": "octocat/Hello-World"}).json()
        assert repo["githubRepoId"] == 1296269
        assert [r["fullName"] for r in api.get(repos_url).json()] == ["octocat/Hello-World"]
        fake_github.get_repository.assert_awaited_once_with("octocat", "Hello-World")

        # Enable commits
        config = api.put(
            f"/api/dashboards/{dashboard['id']}/activity-configs",
            json={"configs": [{"activityTypeName": "commits", "enabled": True}]},
        ).json()
        assert config["trackCommits"] is True
        assert config["trackPRsCreated"] is True

        # Member
        api.post(f"/api/dashboards/{dashboard['id']}/users", json={"githubUsername": "octocat"})
        detail = api.get("/api/dashboards/demo").json()
        assert detail["userCount"] == 1
        assert detail["githubUsers"] == ["octocat"]
        assert "demo" in [d["slug"] for d in api.get(f"/api/dashboards?clientId={client['id']}").json()]

        # Render with the dashboard's layout
        layout = api.post("/api/layouts", json={
            "dashboardTypeCode": detail["dashboardTypeCode"],
            "userActivities": [{"login": "octocat", "totalActivity": 4, "prsCreated": 4}],
        }).json()
        assert layout["layout"] == "team_overview"
        assert layout["memberCount"] == 1
        assert layout["totals"]["prsCreated"] == 4

        # Delete
        assert api.delete(f"/api/dashboards/{dashboard['id']}").status_code == 204
        assert api.get("/api/dashboards/demo").status_code == 404

    def test_teardown_removes_tracked_dashboards(self, e2e_api, e2e_data, seeded_catalog):
        from github_dashboard.models.dashboard import Dashboard

        name = e2e_data.unique_name()
        dashboard = e2e_data.track(e2e_api.post("/api/dashboards", json={"name": name}).json())

        assert seeded_catalog.query(Dashboard).filter_by(id=dashboard["id"]).count() == 1
        assert dashboard["name"] == name
