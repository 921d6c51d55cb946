"""
Reference data lookups: tier types, features and dashboard types.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from github_dashboard.models.dashboard_type import DashboardType
from github_dashboard.models.tier_type import TierType, Feature


class CatalogRepository:
    """Read access to catalog tables that have no dedicated service."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def list_tier_types(self) -> List[TierType]:
        return self.db.query(TierType).order_by(TierType.code.asc()).all()

    def get_tier_type(self, tier_type_id: str) -> Optional[TierType]:
        return self.db.query(TierType).filter(TierType.id == tier_type_id).first()

    def get_tier_type_by_code(self, code: str) -> Optional[TierType]:
        return self.db.query(TierType).filter(TierType.code == code).first()

    def get_feature_by_code(self, code: str) -> Optional[Feature]:
        return self.db.query(Feature).filter(Feature.code == code).first()

    def list_dashboard_types(self) -> List[DashboardType]:
        return self.db.query(DashboardType).order_by(DashboardType.code.asc()).all()

    def get_dashboard_type(self, dashboard_type_id: str) -> Optional[DashboardType]:
        return self.db.query(DashboardType).filter(DashboardType.id == dashboard_type_id).first()

    def get_dashboard_type_by_code(self, code: str) -> Optional[DashboardType]:
        return self.db.query(DashboardType).filter(DashboardType.code == code).first()
