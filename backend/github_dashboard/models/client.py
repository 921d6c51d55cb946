"""
Client model - the tenant that owns dashboards.
"""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from github_dashboard.db_base import Base
from github_dashboard.models.base import TimestampMixin, generate_uuid


class Client(Base, TimestampMixin):
    """A customer organization. Its tier decides which features it sees."""

    __tablename__ = "client"

    id = Column(String(36), primary_key=True, default=generate_uuid, comment="Primary key (UUID)")

    name = Column(String(255), nullable=False, comment="Client display name")

    tier_type_id = Column(
        String(36),
        ForeignKey("tier_type.id"),
        nullable=False,
        index=True,
        comment="Subscription tier of the client",
    )

    logo_url = Column(String(1024), nullable=True, comment="Optional logo shown on dashboards")

    tier_type = relationship("TierType", back_populates="clients")
    dashboards = relationship("Dashboard", back_populates="client")

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name={self.name})>"
