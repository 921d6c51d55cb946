"""
Clients repository.
"""

from typing import List

from github_dashboard.models.client import Client
from github_dashboard.models.tier_type import Feature, TierTypeFeature
from github_dashboard.repositories.base_repo import BaseRepository


class ClientsRepository(BaseRepository[Client]):

    def _get_model_class(self):
        return Client

    def list_all(self) -> List[Client]:
        return self._query().order_by(Client.name.asc()).all()

    def feature_codes(self, client: Client) -> List[str]:
        """Feature codes the client's tier is entitled to."""
        rows = (
            self.db_session.query(Feature.code)
            .join(TierTypeFeature, TierTypeFeature.feature_id == Feature.id)
            .filter(TierTypeFeature.tier_type_id == client.tier_type_id)
            .order_by(Feature.code.asc())
            .all()
        )
        return [code for (code,) in rows]
