"""
Pydantic schemas for clients and catalog listings.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any

from pydantic import Field, field_validator

from github_dashboard.api.schemas.base import ApiModel, RequestModel


class CreateClientRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=255)
    tier_type_id: str = Field(..., min_length=1, max_length=36)
    logo_url: Optional[str] = Field(None, max_length=1024)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Client name cannot be blank")
        return v.strip()


class ClientResponse(ApiModel):
    id: str
    name: str
    tier_type_id: str
    logo_url: Optional[str] = None
    created_at: Optional[datetime] = None


class ClientFeaturesResponse(ApiModel):
    client_id: str
    features: List[str]


class TierTypeResponse(ApiModel):
    id: str
    code: str
    name: str


class DashboardTypeResponse(ApiModel):
    id: str
    code: str
    name: str
    layout_config: Dict[str, Any] = Field(default_factory=dict)
