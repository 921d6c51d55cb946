"""
GitHub-specific exceptions for error handling.
"""

from datetime import datetime
from typing import Optional, Dict, Any


class GitHubError(Exception):
    """Base exception for GitHub API errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, status_code={self.status_code})"


class GitHubNotFoundError(GitHubError):
    """Raised when the requested user or repository does not exist (404)."""

    def __init__(self, message: str = "GitHub resource not found", **kwargs):
        super().__init__(message, status_code=404, **kwargs)


class GitHubAuthenticationError(GitHubError):
    """Raised when the configured token is rejected (401)."""

    def __init__(self, message: str = "GitHub authentication failed - token may be invalid", **kwargs):
        super().__init__(message, status_code=401, **kwargs)


class GitHubAccessDeniedError(GitHubError):
    """Raised on 403 responses that are not rate limiting."""

    def __init__(self, message: str = "Access to GitHub resource denied", **kwargs):
        super().__init__(message, status_code=403, **kwargs)


class GitHubRateLimitError(GitHubError):
    """Raised when the GitHub rate limit is exhausted (403/429 or local tracker)."""

    def __init__(
        self,
        message: str = "GitHub API rate limit exceeded",
        reset_at: Optional[datetime] = None,
        **kwargs,
    ):
        super().__init__(message, status_code=429, **kwargs)
        self.reset_at = reset_at


class GitHubConnectionError(GitHubError):
    """Raised when network/connection errors occur."""

    def __init__(self, message: str = "Connection error - unable to reach GitHub API", **kwargs):
        super().__init__(message, **kwargs)


class GitHubTimeoutError(GitHubError):
    """Raised when request times out."""

    def __init__(self, message: str = "GitHub request timed out", **kwargs):
        super().__init__(message, **kwargs)
