"""
Client Service - tenants, their tiers and feature entitlements.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from github_dashboard.models.client import Client
from github_dashboard.models.dashboard_type import DashboardType
from github_dashboard.models.tier_type import TierType
from github_dashboard.repositories.catalog_repo import CatalogRepository
from github_dashboard.repositories.clients_repo import ClientsRepository

logger = logging.getLogger(__name__)


class ClientNotFoundError(Exception):
    """Client does not exist."""


class TierTypeNotFoundError(Exception):
    """Tier type referenced by a client does not exist."""


class ClientService:

    def __init__(self, db: Session):
        self.db = db
        self.clients = ClientsRepository(db)
        self.catalog = CatalogRepository(db)

    def create_client(
        self,
        name: str,
        tier_type_id: str,
        logo_url: Optional[str] = None,
    ) -> Client:
        """
        Create a client on an existing tier.

        Raises:
            TierTypeNotFoundError: If tier_type_id is unknown
        """
        if not self.catalog.get_tier_type(tier_type_id):
            raise TierTypeNotFoundError(f"Tier type {tier_type_id} not found")

        client = self.clients.create({
            "name": name,
            "tier_type_id": tier_type_id,
            "logo_url": logo_url,
        })
        logger.info("Client created", extra={"client_id": client.id, "tier_type_id": tier_type_id})
        return client

    def get_client(self, client_id: str) -> Client:
        client = self.clients.get_by_id(client_id)
        if not client:
            raise ClientNotFoundError(f"Client {client_id} not found")
        return client

    def list_clients(self) -> List[Client]:
        return self.clients.list_all()

    def get_feature_codes(self, client_id: str) -> List[str]:
        """Feature codes unlocked by the client's tier."""
        return self.clients.feature_codes(self.get_client(client_id))

    def list_tier_types(self) -> List[TierType]:
        return self.catalog.list_tier_types()

    def list_dashboard_types(self) -> List[DashboardType]:
        return self.catalog.list_dashboard_types()
