"""
Pydantic schemas for GitHub passthrough endpoints.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from github_dashboard.api.schemas.base import ApiModel, RequestModel


class GitHubUserResponse(ApiModel):
    id: int
    login: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    html_url: Optional[str] = None


class GitHubRepositoryResponse(ApiModel):
    id: int
    name: str
    full_name: str
    owner_login: str
    html_url: Optional[str] = None
    description: Optional[str] = None
    private: bool = False


class RateLimitResponse(ApiModel):
    limit: int
    remaining: Optional[int] = None
    reset_at: Optional[datetime] = None
    is_limited: bool
    message: str


class PRStatsRequest(RequestModel):
    repos: List[str] = Field(..., min_length=1, max_length=20, description="owner/repo names")


class RepositoryPRStatsResponse(ApiModel):
    repository: str
    pr_count: int
    open_count: int
    closed_count: int
    merged_count: int


class UserPRStatsResponse(ApiModel):
    username: str
    total_prs: int
    open_prs: int
    closed_prs: int
    merged_prs: int
    repositories: List[RepositoryPRStatsResponse]
