"""
Idempotent seeding of reference data from config/catalog.yml.

Rows are matched on their natural key (activity type name, dashboard
type / tier / feature code). Missing rows are inserted and existing ones
get their display fields refreshed. Tier entitlements are reconciled to
exactly the feature list declared for each tier.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from github_dashboard.config.catalog import CatalogLoader, get_catalog_loader
from github_dashboard.models.activity_type import ActivityType
from github_dashboard.models.dashboard_type import DashboardType
from github_dashboard.models.tier_type import TierType, Feature, TierTypeFeature

logger = logging.getLogger(__name__)


@dataclass
class SeedResult:
    created: Dict[str, int] = field(default_factory=dict)
    updated: Dict[str, int] = field(default_factory=dict)

    def record(self, table: str, created: bool) -> None:
        bucket = self.created if created else self.updated
        bucket[table] = bucket.get(table, 0) + 1

    @property
    def total_created(self) -> int:
        return sum(self.created.values())


def _upsert(db: Session, model, key_column: str, key_value: str, values: dict, result: SeedResult):
    row = db.query(model).filter(getattr(model, key_column) == key_value).first()
    if row is None:
        row = model(**{key_column: key_value}, **values)
        db.add(row)
        result.record(model.__tablename__, created=True)
    else:
        for name, value in values.items():
            setattr(row, name, value)
        result.record(model.__tablename__, created=False)
    db.flush()
    return row


def seed_catalog(db: Session, catalog: Optional[CatalogLoader] = None) -> SeedResult:
    """
    Insert or refresh all catalog rows and commit.

    Args:
        db: Database session
        catalog: Catalog to seed from (default: bundled catalog.yml)

    Returns:
        SeedResult with per-table created/updated counts
    """
    catalog = catalog or get_catalog_loader()
    result = SeedResult()

    try:
        for entry in catalog.activity_types:
            _upsert(db, ActivityType, "name", entry["name"], {
                "display_name": entry.get("display_name", entry["name"]),
                "description": entry.get("description"),
                "category": entry.get("category"),
            }, result)

        for entry in catalog.dashboard_types:
            _upsert(db, DashboardType, "code", entry["code"], {
                "name": entry.get("name", entry["code"]),
                "layout_config": entry.get("layout_config") or {},
            }, result)

        features = {}
        for entry in catalog.features:
            features[entry["code"]] = _upsert(db, Feature, "code", entry["code"], {
                "name": entry.get("name", entry["code"]),
            }, result)

        for entry in catalog.tier_types:
            tier = _upsert(db, TierType, "code", entry["code"], {
                "name": entry.get("name", entry["code"]),
            }, result)
            _reconcile_entitlements(db, tier, entry.get("features") or [], features)

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Catalog seeding failed", extra={"error": str(e)})
        raise

    logger.info(
        "Catalog seeded",
        extra={"created": result.created, "updated": result.updated},
    )
    return result


def _reconcile_entitlements(db: Session, tier: TierType, feature_codes, features: Dict[str, Feature]) -> None:
    wanted = {}
    for code in feature_codes:
        if code not in features:
            logger.warning(
                "Tier references unknown feature",
                extra={"tier": tier.code, "feature": code},
            )
            continue
        wanted[features[code].id] = features[code]

    for link in list(tier.feature_links):
        if link.feature_id not in wanted:
            tier.feature_links.remove(link)

    existing = {link.feature_id for link in tier.feature_links}
    for feature_id, feature in wanted.items():
        if feature_id not in existing:
            tier.feature_links.append(TierTypeFeature(feature=feature))
    db.flush()
