"""
GitHub client dependency.

The application creates one GitHubClient in its lifespan hook so the
rate-limit tracker is shared by all requests. Outside a running lifespan
(scripts, bare test apps) a client is created on first use.
"""

import logging

from fastapi import Request

from github_dashboard.config.settings import get_settings
from github_dashboard.integrations.github.client import GitHubClient, get_github_client as create_github_client

logger = logging.getLogger(__name__)


def get_github_client(request: Request) -> GitHubClient:
    client = getattr(request.app.state, "github_client", None)
    if client is None:
        settings = get_settings()
        client = create_github_client(token=settings.github_token, base_url=settings.github_base_url)
        request.app.state.github_client = client
        logger.info("GitHub client created outside lifespan")
    return client
