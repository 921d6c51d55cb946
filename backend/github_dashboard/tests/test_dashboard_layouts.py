"""
Tests for dashboard layout rendering.

Covers:
- Layout selection by dashboard type code, with user_activity fallback
- Activity bands for project_focus
- Totals for team_overview
- Sorting
"""

import pytest

from github_dashboard.services.dashboard_layouts import (
    UserActivitySummary,
    activity_band,
    build_layout,
    sort_activities,
)


def _activity(login, total, created=0, reviewed=0, merged=0):
    return UserActivitySummary(
        login=login,
        total_activity=total,
        prs_created=created,
        prs_reviewed=reviewed,
        prs_merged=merged,
    )


@pytest.fixture
def activities():
    return [
        _activity("alice", 11, created=5, reviewed=4, merged=2),
        _activity("bob", 6, created=3, reviewed=2, merged=1),
        _activity("carol", 0),
        _activity("dave", 10, created=1, reviewed=9),
        _activity("erin", 5, merged=5),
    ]


class TestActivityBand:

    @pytest.mark.parametrize("total,band", [
        (11, "high"),
        (10, "medium"),
        (6, "medium"),
        (5, "low"),
        (0, "low"),
    ])
    def test_thresholds(self, total, band):
        assert activity_band(total) == band


class TestBuildLayout:

    def test_unknown_code_renders_user_activity(self, activities):
        fallback = build_layout("something_else", activities)
        assert fallback == build_layout("user_activity", activities)
        assert build_layout(None, activities) == fallback

    def test_user_activity_cards(self, activities):
        layout = build_layout("user_activity", activities)

        assert layout["layout"] == "user_activity"
        assert [c["login"] for c in layout["cards"]] == ["alice", "dave", "bob", "erin", "carol"]
        assert layout["cards"][0] == {
            "login": "alice",
            "name": "alice",
            "avatarUrl": None,
            "totalActivity": 11,
            "prsCreated": 5,
            "prsReviewed": 4,
            "prsMerged": 2,
        }

    def test_team_overview_totals(self, activities):
        layout = build_layout("team_overview", activities)

        assert layout["layout"] == "team_overview"
        assert layout["memberCount"] == 5
        assert layout["totals"] == {
            "totalActivity": 32,
            "prsCreated": 9,
            "prsReviewed": 15,
            "prsMerged": 8,
        }
        assert len(layout["members"]) == 5

    def test_team_overview_empty(self):
        layout = build_layout("team_overview", [])
        assert layout["memberCount"] == 0
        assert layout["totals"]["totalActivity"] == 0

    def test_project_focus_bands(self, activities):
        layout = build_layout("project_focus", activities)
        bands = layout["bands"]

        assert layout["layout"] == "project_focus"
        assert [c["login"] for c in bands["high"]] == ["alice"]
        assert [c["login"] for c in bands["medium"]] == ["dave", "bob"]
        assert [c["login"] for c in bands["low"]] == ["erin", "carol"]


class TestSortActivities:

    def test_sort_by_count_field(self, activities):
        ordered = sort_activities(activities, "prsReviewed")
        assert ordered[0].login == "dave"

    def test_sort_by_login(self, activities):
        ordered = sort_activities(list(reversed(activities)), "login")
        assert [a.login for a in ordered] == ["alice", "bob", "carol", "dave", "erin"]

    def test_ties_keep_input_order(self):
        tied = [_activity("zed", 3), _activity("amy", 3)]
        assert [a.login for a in sort_activities(tied)] == ["zed", "amy"]

    def test_unknown_sort_field_uses_total(self, activities):
        assert sort_activities(activities, "stars") == sort_activities(activities)


class TestUserActivitySummary:

    def test_from_camel_case_dict(self):
        summary = UserActivitySummary.from_dict({
            "login": "octocat",
            "name": "The Octocat",
            "avatarUrl": "https://avatars.githubusercontent.com/u/583231",
            "totalActivity": 7,
            "prsCreated": 2,
            "prsReviewed": None,
        })

        assert summary.total_activity == 7
        assert summary.prs_created == 2
        assert summary.prs_reviewed == 0
        assert summary.to_card()["name"] == "The Octocat"
