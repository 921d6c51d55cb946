"""
Subscription tiers and the features they unlock.

A client belongs to exactly one tier; the tier_type_feature junction
lists which feature codes each tier is entitled to.
"""

from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from github_dashboard.db_base import Base
from github_dashboard.models.base import TimestampMixin, generate_uuid


class TierType(Base, TimestampMixin):
    """Subscription level of a client (e.g. basic, premium)."""

    __tablename__ = "tier_type"

    id = Column(String(36), primary_key=True, default=generate_uuid, comment="Primary key (UUID)")

    code = Column(
        String(50),
        nullable=False,
        unique=True,
        comment="Stable tier code (basic, premium)",
    )

    name = Column(String(255), nullable=False, comment="Display name")

    feature_links = relationship(
        "TierTypeFeature",
        back_populates="tier_type",
        cascade="all, delete-orphan",
    )

    clients = relationship("Client", back_populates="tier_type")

    def __repr__(self) -> str:
        return f"<TierType(id={self.id}, code={self.code})>"


class Feature(Base, TimestampMixin):
    """A gated capability (export, summary, ...)."""

    __tablename__ = "feature"

    id = Column(String(36), primary_key=True, default=generate_uuid, comment="Primary key (UUID)")
    code = Column(String(50), nullable=False, unique=True, comment="Stable feature code")
    name = Column(String(255), nullable=False, comment="Display name")

    tier_links = relationship(
        "TierTypeFeature",
        back_populates="feature",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Feature(id={self.id}, code={self.code})>"


class TierTypeFeature(Base):
    """Entitlement of a tier to a feature."""

    __tablename__ = "tier_type_feature"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    tier_type_id = Column(
        String(36),
        ForeignKey("tier_type.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    feature_id = Column(
        String(36),
        ForeignKey("feature.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    tier_type = relationship("TierType", back_populates="feature_links")
    feature = relationship("Feature", back_populates="tier_links")

    __table_args__ = (
        UniqueConstraint("tier_type_id", "feature_id", name="uq_tier_type_feature"),
    )
