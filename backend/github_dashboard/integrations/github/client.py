"""
GitHub REST API client.

This client handles:
- User profile lookups (GET /users/{username})
- Repository lookups (GET /repos/{owner}/{repo})
- Pull request and review listings used for activity totals
- Rate limit tracking from response headers

Documentation: https://docs.github.com/en/rest

SECURITY:
- The token is sent as an Authorization header and never logged
"""

import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from github_dashboard.integrations.github.cache_keys import CacheKeys
from github_dashboard.integrations.github.exceptions import (
    GitHubError,
    GitHubNotFoundError,
    GitHubAuthenticationError,
    GitHubAccessDeniedError,
    GitHubRateLimitError,
    GitHubConnectionError,
    GitHubTimeoutError,
)
from github_dashboard.integrations.github.models import (
    GitHubUser,
    GitHubRepository,
    GitHubPullRequest,
    GitHubReview,
)
from github_dashboard.integrations.github.rate_limit import RateLimitTracker, RateLimitStatus

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = "github-dashboard-api"
MAX_PAGE_SIZE = 100


class GitHubClient:
    """
    Async client for the GitHub REST API.

    Works without a token (60 requests/hour); with GITHUB_TOKEN set the
    authenticated limit applies. No retries are attempted.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
        rate_limiter: Optional[RateLimitTracker] = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: Personal access token (default: from GITHUB_TOKEN env)
            base_url: API base URL (default: GITHUB_BASE_URL env or https://api.github.com)
            timeout: Request timeout in seconds
            connect_timeout: Connection timeout in seconds
            user_agent: User-Agent header (required by GitHub)
            rate_limiter: Shared tracker, created if omitted
        """
        self.base_url = (
            base_url or os.getenv("GITHUB_BASE_URL") or DEFAULT_BASE_URL
        ).rstrip("/")
        self.token = token or os.getenv("GITHUB_TOKEN") or None
        self.rate_limiter = rate_limiter or RateLimitTracker()

        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
            logger.info("GitHub client configured with token")
        else:
            logger.warning("GitHub client configured without token - unauthenticated rate limits apply")

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
            headers=headers,
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        endpoint: str,
        resource: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make an HTTP request to the GitHub API.

        Args:
            method: HTTP method
            endpoint: API path relative to base_url
            resource: Resource key used in log records
            params: Query parameters

        Returns:
            Decoded JSON body (object or array)

        Raises:
            GitHubError: On API errors or a body that is not JSON
        """
        if not self.rate_limiter.can_make_request():
            logger.warning(
                "GitHub request blocked by rate limit",
                extra={"resource": resource, "reset_in": self.rate_limiter.seconds_until_reset()},
            )
            raise GitHubRateLimitError(
                message=self.rate_limiter.message(),
                reset_at=self.rate_limiter.reset_at(),
            )

        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        try:
            response = await self._client.request(method=method, url=url, params=params)
        except httpx.TimeoutException as e:
            logger.error("GitHub API timeout", extra={"resource": resource, "error": str(e)})
            raise GitHubTimeoutError(f"Request timeout: {e}")
        except httpx.RequestError as e:
            logger.error("GitHub API connection error", extra={"resource": resource, "error": str(e)})
            raise GitHubConnectionError(f"Connection error: {e}")

        self.rate_limiter.update_from_headers(response.headers)

        if response.status_code < 400:
            try:
                return response.json()
            except ValueError:
                logger.error(
                    "GitHub API returned a non-JSON body",
                    extra={"resource": resource, "status_code": response.status_code},
                )
                raise GitHubError(
                    message=f"Invalid JSON in GitHub response for {resource}",
                    status_code=response.status_code,
                )

        error_body = _safe_json(response)
        error_message = error_body.get("message", "")

        if response.status_code == 404:
            raise GitHubNotFoundError(message=f"Not found: {resource}", response=error_body)

        if response.status_code == 401:
            logger.error("GitHub API authentication failed", extra={"resource": resource})
            raise GitHubAuthenticationError(response=error_body)

        if response.status_code in (403, 429):
            if response.status_code == 429 or _is_rate_limited(response, error_message):
                logger.warning(
                    "GitHub API rate limited",
                    extra={"resource": resource, "status_code": response.status_code},
                )
                raise GitHubRateLimitError(
                    message=error_message or "GitHub API rate limit exceeded",
                    reset_at=self.rate_limiter.reset_at(),
                    response=error_body,
                )
            raise GitHubAccessDeniedError(
                message=error_message or f"Access denied: {resource}",
                response=error_body,
            )

        logger.error(
            "GitHub API error",
            extra={
                "resource": resource,
                "status_code": response.status_code,
                "response": str(error_body)[:500],
            },
        )
        raise GitHubError(
            message=f"GitHub API error: {response.status_code} - {error_message}",
            status_code=response.status_code,
            response=error_body,
        )

    async def get_user(self, username: str) -> GitHubUser:
        """
        Fetch a user's public profile.

        Raises:
            GitHubNotFoundError: If the login does not exist
        """
        data = await self._request("GET", f"/users/{_segment(username)}", CacheKeys.user(username))
        user = GitHubUser.from_dict(data)
        logger.info("Fetched GitHub user", extra={"resource": CacheKeys.user_by_id(user.id)})
        return user

    async def get_repository(self, owner: str, repo: str) -> GitHubRepository:
        """
        Fetch repository metadata, including its numeric id.

        Raises:
            GitHubNotFoundError: If the repository does not exist or is private
        """
        resource = CacheKeys.repo_info(owner, repo)
        data = await self._request("GET", f"/repos/{_segment(owner)}/{_segment(repo)}", resource)
        repository = GitHubRepository.from_dict(data)
        logger.info("Fetched GitHub repository", extra={"resource": resource, "repo_id": repository.id})
        return repository

    async def list_pull_requests(
        self,
        owner: str,
        repo: str,
        state: str = "all",
        per_page: int = MAX_PAGE_SIZE,
        page: int = 1,
    ) -> List[GitHubPullRequest]:
        """
        List pull requests, most recently updated first.

        Only one page is fetched; activity totals look at the newest
        per_page pull requests of each repository.
        """
        resource = CacheKeys.repo_prs_updated(owner, repo)
        data = await self._request(
            "GET",
            f"/repos/{_segment(owner)}/{_segment(repo)}/pulls",
            resource,
            params={
                "state": state,
                "per_page": min(per_page, MAX_PAGE_SIZE),
                "page": page,
                "sort": "updated",
                "direction": "desc",
            },
        )
        pulls = [GitHubPullRequest.from_dict(item) for item in _expect_list(data, resource)]
        logger.debug("Fetched pull requests", extra={"resource": resource, "count": len(pulls)})
        return pulls

    async def list_pull_request_reviews(self, owner: str, repo: str, number: int) -> List[GitHubReview]:
        """List the reviews submitted on one pull request."""
        resource = CacheKeys.pr_reviews(owner, repo, number)
        data = await self._request(
            "GET",
            f"/repos/{_segment(owner)}/{_segment(repo)}/pulls/{int(number)}/reviews",
            resource,
            params={"per_page": MAX_PAGE_SIZE},
        )
        return [GitHubReview.from_dict(item) for item in _expect_list(data, resource)]

    def get_rate_limit_status(self) -> RateLimitStatus:
        """Latest observed rate-limit state. No network call."""
        return self.rate_limiter.status()


def _segment(value: str) -> str:
    """Quote one path segment; dot segments can never name a user or repo."""
    value = str(value)
    if value in ("", ".", ".."):
        raise GitHubNotFoundError(message=f"Not found: {value!r}")
    return quote(value, safe="")


def _expect_list(data: Any, resource: str) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        raise GitHubError(message=f"Unexpected GitHub response for {resource}")
    return data


def _safe_json(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _is_rate_limited(response: httpx.Response, message: str) -> bool:
    return (
        response.headers.get("x-ratelimit-remaining") == "0"
        or "rate limit" in message.lower()
    )


def get_github_client(
    token: Optional[str] = None,
    base_url: Optional[str] = None,
) -> GitHubClient:
    """
    Factory function to create a GitHub client.

    Args:
        token: Optional token override
        base_url: Optional base URL override

    Returns:
        Configured GitHubClient instance
    """
    return GitHubClient(token=token, base_url=base_url)
