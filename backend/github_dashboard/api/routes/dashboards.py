"""
Dashboards API - CRUD, membership, activity configuration and activity totals.

Mounted at /api/dashboards

404 for unknown dashboards, users and repositories; 409 for slug,
membership and repository conflicts; 400 for names without a usable slug.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query, Response, status

from github_dashboard.api.dependencies.github import get_github_client
from github_dashboard.api.routes.github import raise_for_github_error
from github_dashboard.api.schemas.dashboards import (
    CreateDashboardRequest,
    UpdateDashboardRequest,
    DashboardResponse,
    DashboardDetailResponse,
    AddDashboardUserRequest,
    DashboardUserResponse,
    AddRepositoryRequest,
    DashboardRepositoryResponse,
    ActivityConfigResponse,
    DateRangeResponse,
    UpdateActivityConfigRequest,
    UserActivityResponse,
    DashboardActivityResponse,
)
from github_dashboard.database.session import get_db_session
from github_dashboard.integrations.github.exceptions import GitHubError
from github_dashboard.models.dashboard import Dashboard
from github_dashboard.models.dashboard_github_user import DashboardGithubUser
from github_dashboard.services.activity_service import ActivityService
from github_dashboard.services.dashboard_layouts import DEFAULT_SORT, build_layout
from github_dashboard.services.dashboard_service import (
    DashboardService,
    DashboardSummary,
    ActivityConfiguration,
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
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/dashboards", tags=["dashboards"])


# =============================================================================
# Dependency Helpers
# =============================================================================

def _get_dashboard_service(
    db=Depends(get_db_session),
    github_client=Depends(get_github_client),
) -> DashboardService:
    return DashboardService(db, github_client)


def _get_activity_service(
    db=Depends(get_db_session),
    github_client=Depends(get_github_client),
) -> ActivityService:
    return ActivityService(db, github_client)


def _dashboard_to_response(dashboard: Dashboard) -> DashboardResponse:
    return DashboardResponse(
        id=dashboard.id,
        name=dashboard.name,
        slug=dashboard.slug,
        description=dashboard.description,
        is_public=dashboard.is_public,
        client_id=dashboard.client_id,
        dashboard_type_id=dashboard.dashboard_type_id,
        dashboard_type_code=dashboard.dashboard_type.code if dashboard.dashboard_type else None,
        created_at=dashboard.created_at,
        updated_at=dashboard.updated_at,
    )


def _summary_to_response(summary: DashboardSummary) -> DashboardDetailResponse:
    base = _dashboard_to_response(summary.dashboard)
    return DashboardDetailResponse(
        **base.model_dump(),
        github_users=summary.github_users,
        user_count=summary.user_count,
    )


def _link_to_response(link: DashboardGithubUser) -> DashboardUserResponse:
    user = link.github_user
    return DashboardUserResponse(
        id=link.id,
        dashboard_id=link.dashboard_id,
        github_user_id=user.github_user_id,
        github_username=user.github_username,
        display_name=user.display_name,
        avatar_url=user.avatar_url,
        profile_url=user.profile_url,
        added_at=link.added_at,
    )


def _config_to_response(config: ActivityConfiguration) -> ActivityConfigResponse:
    return ActivityConfigResponse(
        track_prs_created=config.track_prs_created,
        track_prs_merged=config.track_prs_merged,
        track_pr_reviews=config.track_pr_reviews,
        track_commits=config.track_commits,
        track_issues=config.track_issues,
        date_range=DateRangeResponse(start=config.date_range_start, end=config.date_range_end),
    )


# =============================================================================
# Dashboard CRUD
# =============================================================================

@router.get("", response_model=List[DashboardDetailResponse])
async def list_dashboards(
    client_id: Optional[str] = Query(None, alias="clientId"),
    service: DashboardService = Depends(_get_dashboard_service),
):
    """List public dashboards with their member counts."""
    return [_summary_to_response(s) for s in service.list_public_dashboards(client_id=client_id)]


@router.post("", response_model=DashboardResponse, status_code=201)
async def create_dashboard(
    body: CreateDashboardRequest,
    service: DashboardService = Depends(_get_dashboard_service),
):
    """Create a dashboard. The slug is derived from the name."""
    try:
        dashboard = service.create_dashboard(
            name=body.name,
            description=body.description,
            is_public=body.is_public,
            client_id=body.client_id,
            dashboard_type_id=body.dashboard_type_id,
        )
    except InvalidDashboardNameError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DashboardConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ReferencedEntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _dashboard_to_response(dashboard)


@router.get("/{slug}", response_model=DashboardDetailResponse)
async def get_dashboard(
    slug: str,
    service: DashboardService = Depends(_get_dashboard_service),
):
    """Get a dashboard by slug."""
    try:
        summary = service.get_dashboard_by_slug(slug)
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")

    return _summary_to_response(summary)


@router.put("/{dashboard_id}", response_model=DashboardResponse)
async def update_dashboard(
    dashboard_id: str,
    body: UpdateDashboardRequest,
    service: DashboardService = Depends(_get_dashboard_service),
):
    """Update the fields present in the body."""
    try:
        dashboard = service.update_dashboard(
            dashboard_id,
            body.model_dump(exclude_unset=True),
        )
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")
    except InvalidDashboardNameError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DashboardConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ReferencedEntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _dashboard_to_response(dashboard)


@router.delete("/{dashboard_id}", status_code=204)
async def delete_dashboard(
    dashboard_id: str,
    service: DashboardService = Depends(_get_dashboard_service),
):
    """Delete a dashboard and everything attached to it."""
    try:
        service.delete_dashboard(dashboard_id)
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")
    return Response(status_code=204)


# =============================================================================
# GitHub users
# =============================================================================

@router.get("/{dashboard_id}/users", response_model=List[DashboardUserResponse])
async def list_dashboard_users(
    dashboard_id: str,
    service: DashboardService = Depends(_get_dashboard_service),
):
    try:
        links = service.list_users(dashboard_id)
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")
    return [_link_to_response(link) for link in links]


@router.post("/{dashboard_id}/users", response_model=DashboardUserResponse, status_code=201)
async def add_dashboard_user(
    dashboard_id: str,
    body: AddDashboardUserRequest,
    service: DashboardService = Depends(_get_dashboard_service),
):
    """Resolve a GitHub login and add it to the dashboard."""
    try:
        link = await service.add_user(
            dashboard_id,
            github_username=body.github_username,
            display_name=body.display_name,
        )
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")
    except DashboardUserConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except GitHubError as e:
        raise_for_github_error(e)

    return _link_to_response(link)


@router.delete("/{dashboard_id}/users/{username}", status_code=204)
async def remove_dashboard_user(
    dashboard_id: str,
    username: str,
    service: DashboardService = Depends(_get_dashboard_service),
):
    try:
        service.remove_user(dashboard_id, username)
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")
    except DashboardUserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


# =============================================================================
# Repositories
# =============================================================================

@router.get("/{dashboard_id}/repositories", response_model=List[DashboardRepositoryResponse])
async def list_dashboard_repositories(
    dashboard_id: str,
    service: DashboardService = Depends(_get_dashboard_service),
):
    try:
        return service.list_repositories(dashboard_id)
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")


@router.post("/{dashboard_id}/repositories", response_model=DashboardRepositoryResponse, status_code=201)
async def add_dashboard_repository(
    dashboard_id: str,
    body: AddRepositoryRequest,
    service: DashboardService = Depends(_get_dashboard_service),
):
    """Attach an "owner/repo" repository after resolving it on GitHub."""
    try:
        return await service.add_repository(dashboard_id, body.full_name)
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")
    except DashboardRepositoryConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{dashboard_id}/repositories/{owner}/{repo}", status_code=204)
async def remove_dashboard_repository(
    dashboard_id: str,
    owner: str,
    repo: str,
    service: DashboardService = Depends(_get_dashboard_service),
):
    try:
        service.remove_repository(dashboard_id, f"{owner}/{repo}")
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")
    except DashboardRepositoryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


# =============================================================================
# Activity configuration
# =============================================================================

@router.get("/{dashboard_id}/activity-configs", response_model=ActivityConfigResponse)
async def get_activity_configuration(
    dashboard_id: str,
    service: DashboardService = Depends(_get_dashboard_service),
):
    try:
        config = service.get_activity_configuration(dashboard_id)
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")
    return _config_to_response(config)


@router.put("/{dashboard_id}/activity-configs", response_model=ActivityConfigResponse)
async def update_activity_configuration(
    dashboard_id: str,
    body: UpdateActivityConfigRequest,
    service: DashboardService = Depends(_get_dashboard_service),
):
    """Upsert activity toggles. Unknown activity type names are ignored."""
    updates = [
        ActivityConfigUpdate(
            activity_type_name=item.activity_type_name,
            enabled=item.enabled,
            date_range_start=item.date_range_start,
            date_range_end=item.date_range_end,
        )
        for item in body.configs
    ]
    try:
        config = service.update_activity_configuration(dashboard_id, updates)
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")
    return _config_to_response(config)


# =============================================================================
# Activity
# =============================================================================

@router.get("/{dashboard_id}/activity", response_model=DashboardActivityResponse)
async def get_dashboard_activity(
    dashboard_id: str,
    include_reviews: bool = Query(True, alias="includeReviews"),
    users: Optional[List[str]] = Query(None),
    sort_by: str = Query(DEFAULT_SORT, alias="sortBy", max_length=50),
    service: ActivityService = Depends(_get_activity_service),
):
    """
    Per-member pull request totals over the dashboard's date range,
    rendered with the dashboard type's layout.
    """
    try:
        dashboard = service.dashboards.get_dashboard(dashboard_id)
        activities, start, end = await service.summarize_dashboard(
            dashboard.id,
            include_reviews=include_reviews,
            users=users,
        )
    except DashboardNotFoundError:
        raise HTTPException(status_code=404, detail="Dashboard not found")

    type_code = dashboard.dashboard_type.code if dashboard.dashboard_type else None

    return DashboardActivityResponse(
        dashboard_id=dashboard_id,
        date_range=DateRangeResponse(start=format_timestamp(start), end=format_timestamp(end)),
        activities=[UserActivityResponse.model_validate(a) for a in activities],
        layout=build_layout(type_code, activities, sort_by=sort_by),
    )
