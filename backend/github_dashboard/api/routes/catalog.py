"""
Reference data listings: activity types, dashboard types, tier types.
"""

from typing import List

from fastapi import APIRouter, Depends

from github_dashboard.api.schemas.clients import TierTypeResponse, DashboardTypeResponse
from github_dashboard.api.schemas.dashboards import ActivityTypeResponse
from github_dashboard.database.session import get_db_session
from github_dashboard.repositories.activity_types_repo import ActivityTypesRepository
from github_dashboard.services.client_service import ClientService

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/activity-types", response_model=List[ActivityTypeResponse])
async def list_activity_types(db=Depends(get_db_session)):
    return ActivityTypesRepository(db).list_all()


@router.get("/dashboard-types", response_model=List[DashboardTypeResponse])
async def list_dashboard_types(db=Depends(get_db_session)):
    return ClientService(db).list_dashboard_types()


@router.get("/tier-types", response_model=List[TierTypeResponse])
async def list_tier_types(db=Depends(get_db_session)):
    return ClientService(db).list_tier_types()
