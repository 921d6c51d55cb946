"""
Repository attached to a dashboard.
"""

from sqlalchemy import Column, String, BigInteger, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from github_dashboard.db_base import Base
from github_dashboard.models.base import generate_uuid, utcnow


class DashboardRepository(Base):
    __tablename__ = "dashboard_repository"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    dashboard_id = Column(
        String(36),
        ForeignKey("dashboard.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    github_repo_id = Column(BigInteger, nullable=False, comment="GitHub numeric repository id")
    owner = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    full_name = Column(String(512), nullable=False, comment="owner/name as submitted")

    added_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    dashboard = relationship("Dashboard", back_populates="repositories")

    __table_args__ = (
        UniqueConstraint("dashboard_id", "github_repo_id", name="uq_dashboard_repository"),
    )

    def __repr__(self) -> str:
        return f"<DashboardRepository(dashboard_id={self.dashboard_id}, full_name={self.full_name})>"
