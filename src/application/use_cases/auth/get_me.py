from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.role import Role


@dataclass(slots=True)
class MeResult:
    user_id: UUID
    username: str
    email: str
    role: Role
    organization_id: UUID
    organization_name: str
    claims: dict[str, Any]


async def execute(
    *,
    uow: UnitOfWork,
    user_id: UUID,
    claims: dict[str, Any],
) -> MeResult:
    user = await uow.users.get(user_id)
    if not user:
        raise NotFound("User not found")
    organization = await uow.organizations.get(user.organization_id)
    if not organization:
        raise NotFound("Organization not found")
    return MeResult(
        user_id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        organization_id=organization.id,
        organization_name=organization.name,
        claims=claims,
    )
