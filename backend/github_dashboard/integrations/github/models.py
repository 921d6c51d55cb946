"""
GitHub API response models.

Only the fields the dashboard stores, returns or aggregates are kept.
A payload without the identifying field (id, or number for pull
requests) raises GitHubError rather than producing a placeholder.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from github_dashboard.integrations.github.exceptions import GitHubError


def _require(data: Dict[str, Any], key: str, kind: str) -> Any:
    if not isinstance(data, dict):
        raise GitHubError(f"Unexpected GitHub {kind} payload")
    value = data.get(key)
    if value is None:
        raise GitHubError(f"GitHub {kind} response is missing '{key}'")
    return value


def parse_github_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse GitHub's "2024-01-01T12:00:00Z" timestamps as aware UTC datetimes."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class GitHubUser:
    """Public profile of a GitHub account."""
    id: int
    login: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    html_url: Optional[str] = None
    type: str = "User"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GitHubUser":
        return cls(
            id=_require(data, "id", "user"),
            login=_require(data, "login", "user"),
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            html_url=data.get("html_url"),
            type=data.get("type", "User"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "login": self.login,
            "name": self.name,
            "avatar_url": self.avatar_url,
            "html_url": self.html_url,
            "type": self.type,
        }


@dataclass
class GitHubRepository:
    """A repository as returned by GET /repos/{owner}/{repo}."""
    id: int
    name: str
    full_name: str
    owner_login: str
    html_url: Optional[str] = None
    description: Optional[str] = None
    private: bool = False
    default_branch: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GitHubRepository":
        repo_id = _require(data, "id", "repository")
        owner = data.get("owner") or {}
        return cls(
            id=repo_id,
            name=data.get("name", ""),
            full_name=data.get("full_name", ""),
            owner_login=owner.get("login", ""),
            html_url=data.get("html_url"),
            description=data.get("description"),
            private=bool(data.get("private", False)),
            default_branch=data.get("default_branch"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "full_name": self.full_name,
            "owner_login": self.owner_login,
            "html_url": self.html_url,
            "description": self.description,
            "private": self.private,
            "default_branch": self.default_branch,
        }


@dataclass
class GitHubPullRequest:
    """One entry of GET /repos/{owner}/{repo}/pulls."""
    number: int
    state: str
    author_id: Optional[int] = None
    author_login: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GitHubPullRequest":
        number = _require(data, "number", "pull request")
        author = data.get("user") or {}
        return cls(
            number=number,
            state=data.get("state", ""),
            author_id=author.get("id"),
            author_login=author.get("login"),
            created_at=parse_github_timestamp(data.get("created_at")),
            updated_at=parse_github_timestamp(data.get("updated_at")),
            merged_at=parse_github_timestamp(data.get("merged_at")),
        )

    @property
    def is_merged(self) -> bool:
        return self.merged_at is not None


@dataclass
class GitHubReview:
    """One entry of GET /repos/{owner}/{repo}/pulls/{number}/reviews."""
    id: int
    state: str
    reviewer_id: Optional[int] = None
    reviewer_login: Optional[str] = None
    submitted_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GitHubReview":
        review_id = _require(data, "id", "review")
        reviewer = data.get("user") or {}
        return cls(
            id=review_id,
            state=data.get("state", ""),
            reviewer_id=reviewer.get("id"),
            reviewer_login=reviewer.get("login"),
            submitted_at=parse_github_timestamp(data.get("submitted_at")),
        )
