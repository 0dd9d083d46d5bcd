from __future__ import annotations

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.interfaces.http.schemas.cattle import CattleResponse


class SeminationCreate(BaseModel):
    cattle_id: UUID
    semination_date: date
    notes: str | None = None


class PregnancyCheckRequest(BaseModel):
    is_pregnant: bool
    notes: str | None = None


class SeminationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    organization_id: UUID
    cattle_id: UUID
    semination_date: date
    check_date: date
    is_pregnant: bool | None = None
    checked_at: datetime | None = None
    notes: str | None = None
    created_by_id: UUID
    created_at: datetime


class PregnancyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    organization_id: UUID
    cattle_id: UUID
    semination_record_id: UUID
    expected_delivery_date: date
    actual_delivery_date: date | None = None
    calf_id: UUID | None = None
    status: str
    notes: str | None = None
    created_by_id: UUID
    created_at: datetime
    updated_at: datetime


class SeminationHistoryItem(SeminationResponse):
    pregnancy: PregnancyResponse | None = None


class PregnancyCheckResponse(BaseModel):
    semination: SeminationResponse
    pregnancy: PregnancyResponse | None = None


class DeliveryRequest(BaseModel):
    actual_delivery_date: date
    calf_tag_number: str = Field(..., min_length=1, max_length=64)
    calf_name: str = Field(..., min_length=1, max_length=255)
    calf_gender: Literal["MALE", "FEMALE"]
    calf_breed: str = Field(..., min_length=1, max_length=128)
    notes: str | None = None

    @field_validator("calf_tag_number", "calf_name", "calf_breed")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class DeliveryResponse(BaseModel):
    pregnancy: PregnancyResponse
    calf: CattleResponse


class SeparationRequest(BaseModel):
    notes: str | None = None


class PregnancyStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    in_progress: int
    delivered: int
    separated: int
    overdue: int
