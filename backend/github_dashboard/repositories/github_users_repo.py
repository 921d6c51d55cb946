"""
GitHub users repository.

Profiles are keyed by GitHub's numeric id; logins are matched
case-insensitively since GitHub treats them that way.
"""

import logging
from typing import Optional

from sqlalchemy import func

from github_dashboard.models.github_user import GithubUser
from github_dashboard.repositories.base_repo import BaseRepository

logger = logging.getLogger(__name__)


class GithubUsersRepository(BaseRepository[GithubUser]):

    def _get_model_class(self):
        return GithubUser

    def get_by_github_id(self, github_user_id: str) -> Optional[GithubUser]:
        return self._query().filter(GithubUser.github_user_id == str(github_user_id)).first()

    def get_by_username(self, username: str) -> Optional[GithubUser]:
        return (
            self._query()
            .filter(func.lower(GithubUser.github_username) == username.lower())
            .first()
        )

    def upsert(
        self,
        github_user_id: str,
        github_username: str,
        display_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
        profile_url: Optional[str] = None,
    ) -> GithubUser:
        """Insert a profile or refresh the stored one with the same GitHub id."""
        values = {
            "github_username": github_username,
            "display_name": display_name,
            "avatar_url": avatar_url,
            "profile_url": profile_url,
        }

        existing = self.get_by_github_id(github_user_id)
        if existing:
            logger.debug(
                "Refreshing GitHub user profile",
                extra={"github_user_id": github_user_id, "login": github_username},
            )
            return self.update(existing.id, values)

        return self.create({"github_user_id": str(github_user_id), **values})
