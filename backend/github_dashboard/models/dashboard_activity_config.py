"""
Per-dashboard activity tracking configuration.

Rows are sparse: an activity type with no row for a dashboard falls
back to its default toggle when the configuration is read.
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from github_dashboard.db_base import Base
from github_dashboard.models.base import TimestampMixin, generate_uuid


class DashboardActivityConfig(Base, TimestampMixin):
    __tablename__ = "dashboard_activity_config"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    dashboard_id = Column(
        String(36),
        ForeignKey("dashboard.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    activity_type_id = Column(
        String(36),
        ForeignKey("activity_type.id", ondelete="CASCADE"),
        nullable=False,
    )

    enabled = Column(Boolean, nullable=False, default=True)

    date_range_start = Column(DateTime(timezone=True), nullable=True, comment="Inclusive, UTC")
    date_range_end = Column(DateTime(timezone=True), nullable=True, comment="Inclusive, UTC")

    dashboard = relationship("Dashboard", back_populates="activity_configs")
    activity_type = relationship("ActivityType", back_populates="configs")

    __table_args__ = (
        UniqueConstraint("dashboard_id", "activity_type_id", name="uq_dashboard_activity_config"),
    )

    def __repr__(self) -> str:
        return (
            f"<DashboardActivityConfig(dashboard_id={self.dashboard_id}, "
            f"activity_type_id={self.activity_type_id}, enabled={self.enabled})>"
        )
