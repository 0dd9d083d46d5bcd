from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.access import Actor
from src.application.errors import PermissionDenied
from src.domain.value_objects.role import Role
from src.infrastructure.db.orm.user import UserORM


@dataclass(slots=True)
class AuthContext:
    user_id: UUID
    username: str
    organization_id: UUID
    role: Role
    claims: dict[str, Any]

    def require_roles(self, allowed: Iterable[Role]) -> None:
        if self.role not in set(allowed):
            raise PermissionDenied("Role not allowed for this action")

    def actor(self) -> Actor:
        return Actor(user_id=self.user_id, organization_id=self.organization_id, role=self.role)


async def fetch_user(session: AsyncSession, user_id: UUID) -> UserORM | None:
    result = await session.execute(select(UserORM).where(UserORM.id == user_id))
    return result.scalar_one_or_none()
