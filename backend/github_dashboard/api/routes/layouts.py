"""
Layout rendering API.

Mounted at /api/layouts
"""

from fastapi import APIRouter

from github_dashboard.api.schemas.layouts import LayoutRequest, LayoutResponse
from github_dashboard.services.dashboard_layouts import UserActivitySummary, build_layout

router = APIRouter(prefix="/api/layouts", tags=["layouts"])


@router.post("", response_model=LayoutResponse)
async def render_layout(body: LayoutRequest):
    """Render per-user activity with the layout for dashboardTypeCode."""
    activities = [
        UserActivitySummary(
            login=item.login,
            name=item.name,
            avatar_url=item.avatar_url,
            total_activity=item.total_activity,
            prs_created=item.prs_created,
            prs_reviewed=item.prs_reviewed,
            prs_merged=item.prs_merged,
        )
        for item in body.user_activities
    ]
    return build_layout(body.dashboard_type_code, activities, sort_by=body.sort_by)
