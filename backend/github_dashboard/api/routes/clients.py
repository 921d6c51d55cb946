"""
Clients API.

Mounted at /api/clients
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Depends

from github_dashboard.api.schemas.clients import (
    CreateClientRequest,
    ClientResponse,
    ClientFeaturesResponse,
)
from github_dashboard.database.session import get_db_session
from github_dashboard.services.client_service import (
    ClientService,
    ClientNotFoundError,
    TierTypeNotFoundError,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/clients", tags=["clients"])


def _get_client_service(db=Depends(get_db_session)) -> ClientService:
    return ClientService(db)


@router.get("", response_model=List[ClientResponse])
async def list_clients(service: ClientService = Depends(_get_client_service)):
    return service.list_clients()


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    body: CreateClientRequest,
    service: ClientService = Depends(_get_client_service),
):
    try:
        return service.create_client(
            name=body.name,
            tier_type_id=body.tier_type_id,
            logo_url=body.logo_url,
        )
    except TierTypeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: str,
    service: ClientService = Depends(_get_client_service),
):
    try:
        return service.get_client(client_id)
    except ClientNotFoundError:
        raise HTTPException(status_code=404, detail="Client not found")


@router.get("/{client_id}/features", response_model=ClientFeaturesResponse)
async def get_client_features(
    client_id: str,
    service: ClientService = Depends(_get_client_service),
):
    """Feature codes unlocked by the client's tier."""
    try:
        features = service.get_feature_codes(client_id)
    except ClientNotFoundError:
        raise HTTPException(status_code=404, detail="Client not found")
    return ClientFeaturesResponse(client_id=client_id, features=features)
