"""
Activity type catalog (prs_opened, prs_merged, pr_reviews, commits, issues).
"""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from github_dashboard.db_base import Base
from github_dashboard.models.base import TimestampMixin, generate_uuid


class ActivityType(Base, TimestampMixin):
    __tablename__ = "activity_type"

    id = Column(String(36), primary_key=True, default=generate_uuid, comment="Primary key (UUID)")
    name = Column(String(100), nullable=False, unique=True, comment="Machine name, e.g. prs_opened")
    display_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=True, comment="Grouping, e.g. pull_requests")

    configs = relationship(
        "DashboardActivityConfig",
        back_populates="activity_type",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<ActivityType(id={self.id}, name={self.name})>"
