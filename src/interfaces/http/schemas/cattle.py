from __future__ import annotations

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.interfaces.http.schemas.auth import PaginationInfo


class CattleCreate(BaseModel):
    tag_number: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    breed: str = Field(..., min_length=1, max_length=128)
    gender: Literal["MALE", "FEMALE"]
    date_of_birth: date
    parent_id: UUID | None = None
    assigned_user_id: UUID | None = None
    photo_url: str | None = None

    @field_validator("tag_number", "name", "breed")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class CattleUpdate(BaseModel):
    version: int
    name: str | None = Field(default=None, min_length=1, max_length=255)
    breed: str | None = Field(default=None, min_length=1, max_length=128)
    date_of_birth: date | None = None
    photo_url: str | None = None
    assigned_user_id: UUID | None = None


class CattleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    organization_id: UUID
    tag_number: str
    name: str
    breed: str
    gender: str
    date_of_birth: date
    status: str
    parent_id: UUID | None = None
    assigned_user_id: UUID | None = None
    photo_url: str | None = None
    created_at: datetime
    updated_at: datetime
    version: int


class CattleListResponse(BaseModel):
    items: list[CattleResponse]
    pagination: PaginationInfo
