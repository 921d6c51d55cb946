"""
GitHub lookup API.

Mounted at /api/github

Thin passthrough to the GitHub client with its errors mapped to HTTP:
404 unknown resource, 403 access denied, 429 rate limited, 502 otherwise.
PR stats skip repositories GitHub cannot serve and 400 on malformed names.
"""

import logging
from typing import NoReturn

from fastapi import APIRouter, HTTPException, Depends

from github_dashboard.api.dependencies.github import get_github_client
from github_dashboard.api.schemas.github import (
    GitHubUserResponse,
    GitHubRepositoryResponse,
    RateLimitResponse,
    PRStatsRequest,
    UserPRStatsResponse,
)
from github_dashboard.integrations.github.client import GitHubClient
from github_dashboard.integrations.github.exceptions import (
    GitHubError,
    GitHubNotFoundError,
    GitHubAccessDeniedError,
    GitHubRateLimitError,
)
from github_dashboard.services.activity_service import user_pr_stats
from github_dashboard.services.dashboard_service import DashboardRepositoryConflictError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/github", tags=["github"])


def raise_for_github_error(error: GitHubError) -> NoReturn:
    """Translate a GitHub integration error into an HTTPException."""
    if isinstance(error, GitHubNotFoundError):
        raise HTTPException(status_code=404, detail=error.message)
    if isinstance(error, GitHubAccessDeniedError):
        raise HTTPException(status_code=403, detail=error.message)
    if isinstance(error, GitHubRateLimitError):
        headers = {}
        if error.reset_at:
            headers["X-RateLimit-Reset"] = str(int(error.reset_at.timestamp()))
        raise HTTPException(status_code=429, detail=error.message, headers=headers or None)

    logger.error(
        "GitHub request failed",
        extra={"error_type": type(error).__name__, "status_code": error.status_code},
    )
    raise HTTPException(status_code=502, detail="GitHub request failed")


@router.get("/users/{username}", response_model=GitHubUserResponse)
async def get_github_user(
    username: str,
    client: GitHubClient = Depends(get_github_client),
):
    try:
        user = await client.get_user(username)
    except GitHubError as e:
        raise_for_github_error(e)
    return GitHubUserResponse(**user.to_dict())


@router.get("/repos/{owner}/{repo}", response_model=GitHubRepositoryResponse)
async def get_github_repository(
    owner: str,
    repo: str,
    client: GitHubClient = Depends(get_github_client),
):
    try:
        repository = await client.get_repository(owner, repo)
    except GitHubError as e:
        raise_for_github_error(e)
    return GitHubRepositoryResponse.model_validate(repository)


@router.post("/users/{username}/pr-stats", response_model=UserPRStatsResponse)
async def get_user_pr_stats(
    username: str,
    body: PRStatsRequest,
    client: GitHubClient = Depends(get_github_client),
):
    """Count a user's pull requests in each listed repository."""
    try:
        stats = await user_pr_stats(client, username, body.repos)
    except DashboardRepositoryConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return UserPRStatsResponse.model_validate(stats)


@router.get("/rate-limit", response_model=RateLimitResponse)
async def get_rate_limit(client: GitHubClient = Depends(get_github_client)):
    """Last observed GitHub rate limit. Does not call GitHub."""
    status = client.get_rate_limit_status()
    return RateLimitResponse(
        limit=status.limit,
        remaining=status.remaining,
        reset_at=status.reset_at,
        is_limited=status.is_limited,
        message=client.rate_limiter.message(),
    )
