from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.domain.value_objects.role import Role


class MeResponse(BaseModel):
    user_id: UUID
    username: str
    email: EmailStr
    role: Role
    organization_id: UUID
    organization_name: str
    claims: dict[str, Any]


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    user_id: UUID
    username: str
    organization_id: UUID
    role: Role


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=64)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role = Role.USER
    is_active: bool = True


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: EmailStr
    role: Role
    organization_id: UUID
    is_active: bool


class PaginationInfo(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class UsersListResponse(BaseModel):
    users: list[UserResponse]
    pagination: PaginationInfo
