"""
Dashboard activity configuration repository.

Writes are upserts keyed on (dashboard_id, activity_type_id); rows for
activity types not mentioned in a write are left untouched.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import joinedload
from sqlalchemy.exc import SQLAlchemyError

from github_dashboard.models.dashboard_activity_config import DashboardActivityConfig
from github_dashboard.repositories.base_repo import BaseRepository

logger = logging.getLogger(__name__)


class ActivityConfigsRepository(BaseRepository[DashboardActivityConfig]):

    def _get_model_class(self):
        return DashboardActivityConfig

    def list_for_dashboard(self, dashboard_id: str) -> List[DashboardActivityConfig]:
        return (
            self._query()
            .options(joinedload(DashboardActivityConfig.activity_type))
            .filter(DashboardActivityConfig.dashboard_id == dashboard_id)
            .all()
        )

    def get_config(self, dashboard_id: str, activity_type_id: str) -> Optional[DashboardActivityConfig]:
        return (
            self._query()
            .filter(
                DashboardActivityConfig.dashboard_id == dashboard_id,
                DashboardActivityConfig.activity_type_id == activity_type_id,
            )
            .first()
        )

    def upsert_many(self, dashboard_id: str, rows: List[dict]) -> int:
        """
        Insert or update one config row per entry and commit once.

        Each entry carries activity_type_id, enabled, date_range_start and
        date_range_end.

        Returns:
            Number of rows written
        """
        try:
            for row in rows:
                self._apply(dashboard_id, row)
                self.db_session.flush()
            self.db_session.commit()
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error(
                "Failed to write activity configuration",
                extra={"dashboard_id": dashboard_id, "error": str(e)},
            )
            raise

        logger.info(
            "Activity configuration written",
            extra={"dashboard_id": dashboard_id, "row_count": len(rows)},
        )
        return len(rows)

    def _apply(self, dashboard_id: str, row: dict) -> None:
        values = {
            "enabled": row["enabled"],
            "date_range_start": row.get("date_range_start"),
            "date_range_end": row.get("date_range_end"),
        }
        config = self.get_config(dashboard_id, row["activity_type_id"])
        if config is None:
            self.db_session.add(
                DashboardActivityConfig(
                    dashboard_id=dashboard_id,
                    activity_type_id=row["activity_type_id"],
                    **values,
                )
            )
        else:
            for key, value in values.items():
                setattr(config, key, value)
