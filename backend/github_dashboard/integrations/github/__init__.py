"""
GitHub integration.

Resolves users and repositories and lists pull request activity
through the GitHub REST API.
"""

from github_dashboard.integrations.github.client import (
    GitHubClient,
    get_github_client,
)
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
from github_dashboard.integrations.github.cache_keys import CacheKeys

__all__ = [
    # Client
    "GitHubClient",
    "get_github_client",
    # Exceptions
    "GitHubError",
    "GitHubNotFoundError",
    "GitHubAuthenticationError",
    "GitHubAccessDeniedError",
    "GitHubRateLimitError",
    "GitHubConnectionError",
    "GitHubTimeoutError",
    # Models
    "GitHubUser",
    "GitHubRepository",
    "GitHubPullRequest",
    "GitHubReview",
    # Rate limiting and keys
    "RateLimitTracker",
    "RateLimitStatus",
    "CacheKeys",
]
