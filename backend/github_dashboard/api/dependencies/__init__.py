"""Reusable FastAPI dependencies."""

from github_dashboard.api.dependencies.github import get_github_client

__all__ = ["get_github_client"]
