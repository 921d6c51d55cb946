"""
Pydantic schemas for the Dashboards API.

Covers dashboard CRUD, user and repository membership, and the
activity configuration read/write payloads.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Optional, List, Dict, Any

from pydantic import Field, field_validator

from github_dashboard.api.schemas.base import ApiModel, RequestModel

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_END_OF_DAY = time(23, 59, 59)
# Letters, digits and single inner hyphens, as GitHub allows for logins.
_GITHUB_LOGIN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}$")


def parse_range_bound(value: Any, end_of_day: bool) -> Optional[datetime]:
    """
    Parse a date range bound into a UTC datetime.

    "YYYY-MM-DD" becomes 00:00:00 UTC (start) or 23:59:59 UTC (end).
    Full ISO-8601 timestamps are converted to UTC; naive ones are taken as UTC.
    Empty strings and None mean "no bound".
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _DATE_ONLY.match(text):
            day = date.fromisoformat(text)
            return datetime.combine(day, _END_OF_DAY if end_of_day else time.min, tzinfo=timezone.utc)
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    else:
        raise ValueError("Date range bound must be an ISO-8601 string")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# =============================================================================
# Dashboards
# =============================================================================

class CreateDashboardRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    is_public: Optional[bool] = None
    client_id: Optional[str] = Field(None, max_length=36)
    dashboard_type_id: Optional[str] = Field(None, max_length=36)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Dashboard name cannot be blank")
        return v.strip()


class UpdateDashboardRequest(RequestModel):
    """Partial update: only fields present in the body are changed."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    is_public: Optional[bool] = None
    client_id: Optional[str] = Field(None, max_length=36)
    dashboard_type_id: Optional[str] = Field(None, max_length=36)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Dashboard name cannot be blank")
        return v.strip() if v else v


class DashboardResponse(ApiModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    is_public: bool
    client_id: Optional[str] = None
    dashboard_type_id: Optional[str] = None
    dashboard_type_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DashboardDetailResponse(DashboardResponse):
    github_users: List[str] = Field(default_factory=list)
    user_count: int = 0


# =============================================================================
# Membership
# =============================================================================

class AddDashboardUserRequest(RequestModel):
    github_username: str = Field(..., min_length=1, max_length=39)
    display_name: Optional[str] = Field(None, max_length=255)

    @field_validator("github_username")
    @classmethod
    def username_is_github_login(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("GitHub username cannot be blank")
        if not _GITHUB_LOGIN.match(v):
            raise ValueError("GitHub username may only contain letters, digits and single hyphens")
        return v


class DashboardUserResponse(ApiModel):
    id: str
    dashboard_id: str
    github_user_id: str
    github_username: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    profile_url: Optional[str] = None
    added_at: datetime


class AddRepositoryRequest(RequestModel):
    full_name: str = Field(..., min_length=1, max_length=512, description="owner/repo")


class DashboardRepositoryResponse(ApiModel):
    id: str
    dashboard_id: str
    github_repo_id: int
    owner: str
    name: str
    full_name: str
    added_at: datetime


# =============================================================================
# Activity configuration
# =============================================================================

class DateRangeResponse(ApiModel):
    start: str = ""
    end: str = ""


class ActivityConfigResponse(ApiModel):
    track_prs_created: bool = Field(True, alias="trackPRsCreated")
    track_prs_merged: bool = Field(True, alias="trackPRsMerged")
    track_pr_reviews: bool = Field(True, alias="trackPRReviews")
    track_commits: bool = Field(False, alias="trackCommits")
    track_issues: bool = Field(False, alias="trackIssues")
    date_range: DateRangeResponse = Field(default_factory=DateRangeResponse)


class ActivityConfigItem(RequestModel):
    activity_type_name: str = Field(..., min_length=1, max_length=100)
    enabled: bool
    date_range_start: Optional[datetime] = None
    date_range_end: Optional[datetime] = None

    @field_validator("date_range_start", mode="before")
    @classmethod
    def parse_start(cls, v: Any) -> Optional[datetime]:
        return parse_range_bound(v, end_of_day=False)

    @field_validator("date_range_end", mode="before")
    @classmethod
    def parse_end(cls, v: Any) -> Optional[datetime]:
        return parse_range_bound(v, end_of_day=True)


class UpdateActivityConfigRequest(RequestModel):
    configs: List[ActivityConfigItem] = Field(..., max_length=50)


class ActivityTypeResponse(ApiModel):
    id: str
    name: str
    display_name: str
    description: Optional[str] = None
    category: Optional[str] = None


# =============================================================================
# Activity
# =============================================================================

class UserActivityResponse(ApiModel):
    login: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    total_activity: int = 0
    prs_created: int = 0
    prs_reviewed: int = 0
    prs_merged: int = 0


class DashboardActivityResponse(ApiModel):
    dashboard_id: str
    date_range: DateRangeResponse
    activities: List[UserActivityResponse] = Field(default_factory=list)
    layout: Dict[str, Any] = Field(default_factory=dict)
