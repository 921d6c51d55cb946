"""
Pydantic schemas for layout rendering.
"""

from typing import Optional, List, Dict, Any

from pydantic import Field

from github_dashboard.api.schemas.base import RequestModel


class UserActivityInput(RequestModel):
    login: str = Field(..., min_length=1, max_length=39)
    name: Optional[str] = Field(None, max_length=255)
    avatar_url: Optional[str] = Field(None, max_length=1024)
    total_activity: int = Field(0, ge=0)
    prs_created: int = Field(0, ge=0)
    prs_reviewed: int = Field(0, ge=0)
    prs_merged: int = Field(0, ge=0)


class LayoutRequest(RequestModel):
    dashboard_type_code: Optional[str] = Field(None, max_length=50)
    sort_by: str = Field("totalActivity", max_length=50)
    user_activities: List[UserActivityInput] = Field(default_factory=list, max_length=500)


LayoutResponse = Dict[str, Any]
