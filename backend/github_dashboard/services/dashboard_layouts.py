"""
Presentation layouts for aggregated GitHub activity.

A dashboard type code picks one of three layouts; each turns the same
list of per-user activity summaries into a JSON-ready view model.
Unknown codes render as user_activity.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from github_dashboard.models.dashboard_type import DashboardTypeCode

HIGH_ACTIVITY_THRESHOLD = 10
MEDIUM_ACTIVITY_THRESHOLD = 5

COUNT_FIELDS = ("totalActivity", "prsCreated", "prsReviewed", "prsMerged")
DEFAULT_SORT = "totalActivity"


@dataclass
class UserActivitySummary:
    """Activity counts for one GitHub user over the dashboard's window."""
    login: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    total_activity: int = 0
    prs_created: int = 0
    prs_reviewed: int = 0
    prs_merged: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserActivitySummary":
        return cls(
            login=data.get("login", ""),
            name=data.get("name"),
            avatar_url=data.get("avatarUrl", data.get("avatar_url")),
            total_activity=data.get("totalActivity") or 0,
            prs_created=data.get("prsCreated") or 0,
            prs_reviewed=data.get("prsReviewed") or 0,
            prs_merged=data.get("prsMerged") or 0,
        )

    def counts(self) -> Dict[str, int]:
        return {
            "totalActivity": self.total_activity,
            "prsCreated": self.prs_created,
            "prsReviewed": self.prs_reviewed,
            "prsMerged": self.prs_merged,
        }

    def to_card(self) -> Dict[str, Any]:
        return {
            "login": self.login,
            "name": self.name or self.login,
            "avatarUrl": self.avatar_url,
            **self.counts(),
        }


def sort_activities(activities: List[UserActivitySummary], sort_by: str = DEFAULT_SORT) -> List[UserActivitySummary]:
    """Order by a count field (descending) or by login; ties keep input order."""
    if sort_by == "login":
        return sorted(activities, key=lambda a: a.login.lower())
    if sort_by not in COUNT_FIELDS:
        sort_by = DEFAULT_SORT
    return sorted(activities, key=lambda a: a.counts()[sort_by], reverse=True)


def activity_band(total_activity: int) -> str:
    if total_activity > HIGH_ACTIVITY_THRESHOLD:
        return "high"
    if total_activity > MEDIUM_ACTIVITY_THRESHOLD:
        return "medium"
    return "low"


def render_user_activity(activities: List[UserActivitySummary]) -> Dict[str, Any]:
    return {
        "layout": DashboardTypeCode.USER_ACTIVITY.value,
        "cards": [activity.to_card() for activity in activities],
    }


def render_team_overview(activities: List[UserActivitySummary]) -> Dict[str, Any]:
    totals = {name: 0 for name in COUNT_FIELDS}
    for activity in activities:
        for name, value in activity.counts().items():
            totals[name] += value

    return {
        "layout": DashboardTypeCode.TEAM_OVERVIEW.value,
        "totals": totals,
        "memberCount": len(activities),
        "members": [activity.to_card() for activity in activities],
    }


def render_project_focus(activities: List[UserActivitySummary]) -> Dict[str, Any]:
    bands: Dict[str, List[Dict[str, Any]]] = {"high": [], "medium": [], "low": []}
    for activity in activities:
        bands[activity_band(activity.total_activity)].append(activity.to_card())

    return {
        "layout": DashboardTypeCode.PROJECT_FOCUS.value,
        "bands": bands,
    }


LAYOUT_RENDERERS: Dict[str, Callable[[List[UserActivitySummary]], Dict[str, Any]]] = {
    DashboardTypeCode.USER_ACTIVITY.value: render_user_activity,
    DashboardTypeCode.TEAM_OVERVIEW.value: render_team_overview,
    DashboardTypeCode.PROJECT_FOCUS.value: render_project_focus,
}


def build_layout(
    dashboard_type_code: Optional[str],
    activities: List[UserActivitySummary],
    sort_by: str = DEFAULT_SORT,
) -> Dict[str, Any]:
    """Render activities with the layout for dashboard_type_code."""
    renderer = LAYOUT_RENDERERS.get(dashboard_type_code or "", render_user_activity)
    return renderer(sort_activities(activities, sort_by))
