from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class OrganizationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    created_at: datetime


class OrganizationStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_cattle: int
    cattle_by_status: dict[str, int]
    total_users: int
    total_seminations: int
