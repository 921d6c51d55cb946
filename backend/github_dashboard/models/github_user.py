"""
GitHub user profile cached from the GitHub API.

github_user_id is GitHub's immutable numeric id (stored as text);
the username may change over time.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from github_dashboard.db_base import Base
from github_dashboard.models.base import TimestampMixin, generate_uuid


class GithubUser(Base, TimestampMixin):
    __tablename__ = "github_user"

    id = Column(String(36), primary_key=True, default=generate_uuid, comment="Primary key (UUID)")

    github_user_id = Column(
        String(64),
        nullable=False,
        unique=True,
        comment="GitHub numeric user id",
    )

    github_username = Column(String(255), nullable=False, index=True, comment="GitHub login")
    display_name = Column(String(255), nullable=True)
    avatar_url = Column(String(1024), nullable=True)
    profile_url = Column(String(1024), nullable=True)

    dashboard_links = relationship(
        "DashboardGithubUser",
        back_populates="github_user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<GithubUser(id={self.id}, login={self.github_username})>"
