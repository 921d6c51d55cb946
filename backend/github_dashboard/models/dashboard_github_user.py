"""
Membership of a GitHub user in a dashboard.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from github_dashboard.db_base import Base
from github_dashboard.models.base import generate_uuid, utcnow


class DashboardGithubUser(Base):
    __tablename__ = "dashboard_github_user"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    dashboard_id = Column(
        String(36),
        ForeignKey("dashboard.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    github_user_id = Column(
        String(36),
        ForeignKey("github_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="References github_user.id (not the GitHub numeric id)",
    )

    added_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    dashboard = relationship("Dashboard", back_populates="user_links")
    github_user = relationship("GithubUser", back_populates="dashboard_links")

    __table_args__ = (
        UniqueConstraint("dashboard_id", "github_user_id", name="uq_dashboard_github_user"),
    )

    def __repr__(self) -> str:
        return f"<DashboardGithubUser(dashboard_id={self.dashboard_id}, github_user_id={self.github_user_id})>"
