"""
Dashboard model - a named, slugged view over GitHub activity.

Deleting a dashboard removes its user links, repository links and
activity configuration rows.
"""

from sqlalchemy import Column, String, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship

from github_dashboard.db_base import Base
from github_dashboard.models.base import TimestampMixin, generate_uuid


class Dashboard(Base, TimestampMixin):
    """
    A client's dashboard.

    The slug is derived from the name and is globally unique.
    """

    __tablename__ = "dashboard"

    id = Column(String(36), primary_key=True, default=generate_uuid, comment="Primary key (UUID)")

    name = Column(String(255), nullable=False, comment="User-facing dashboard name")

    slug = Column(
        String(255),
        nullable=False,
        unique=True,
        comment="URL-safe identifier derived from name",
    )

    description = Column(Text, nullable=True, comment="Optional description")

    is_public = Column(
        Boolean,
        nullable=False,
        default=True,
        comment="Public dashboards are listed without authentication",
    )

    client_id = Column(
        String(36),
        ForeignKey("client.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Owning client",
    )

    dashboard_type_id = Column(
        String(36),
        ForeignKey("dashboard_type.id", ondelete="SET NULL"),
        nullable=True,
        comment="Layout used to render this dashboard",
    )

    client = relationship("Client", back_populates="dashboards")
    dashboard_type = relationship("DashboardType")

    user_links = relationship(
        "DashboardGithubUser",
        back_populates="dashboard",
        cascade="all, delete-orphan",
    )

    repositories = relationship(
        "DashboardRepository",
        back_populates="dashboard",
        cascade="all, delete-orphan",
    )

    activity_configs = relationship(
        "DashboardActivityConfig",
        back_populates="dashboard",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Dashboard(id={self.id}, slug={self.slug})>"
