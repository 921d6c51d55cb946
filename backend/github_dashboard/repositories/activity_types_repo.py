"""
Activity type catalog repository.
"""

from typing import Dict, List, Optional

from github_dashboard.models.activity_type import ActivityType
from github_dashboard.repositories.base_repo import BaseRepository


class ActivityTypesRepository(BaseRepository[ActivityType]):

    def _get_model_class(self):
        return ActivityType

    def list_all(self) -> List[ActivityType]:
        return self._query().order_by(ActivityType.category.asc(), ActivityType.name.asc()).all()

    def get_by_name(self, name: str) -> Optional[ActivityType]:
        return self._query().filter(ActivityType.name == name).first()

    def ids_by_name(self) -> Dict[str, str]:
        return {activity.name: activity.id for activity in self._query().all()}
