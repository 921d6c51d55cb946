"""
Dashboard type model.

The code selects the presentation layout used to render a dashboard.
"""

from enum import Enum as PyEnum

from sqlalchemy import Column, String, JSON

from github_dashboard.db_base import Base
from github_dashboard.models.base import TimestampMixin, generate_uuid


class DashboardTypeCode(str, PyEnum):
    """Known layout discriminators."""
    USER_ACTIVITY = "user_activity"
    TEAM_OVERVIEW = "team_overview"
    PROJECT_FOCUS = "project_focus"


class DashboardType(Base, TimestampMixin):
    __tablename__ = "dashboard_type"

    id = Column(String(36), primary_key=True, default=generate_uuid, comment="Primary key (UUID)")

    code = Column(
        String(50),
        nullable=False,
        unique=True,
        comment="Layout discriminator: user_activity, team_overview, project_focus",
    )

    name = Column(String(255), nullable=False, comment="Display name")

    layout_config = Column(
        JSON,
        nullable=False,
        default=dict,
        comment="Presentation hints for the layout",
    )

    def __repr__(self) -> str:
        return f"<DashboardType(id={self.id}, code={self.code})>"
