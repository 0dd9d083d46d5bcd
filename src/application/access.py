from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import NotFound, PermissionDenied
from src.domain.models.cattle import Cattle
from src.domain.value_objects.role import Role


@dataclass(slots=True, frozen=True)
class Actor:
    user_id: UUID
    organization_id: UUID
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def assigned_filter(self) -> UUID | None:
        """User id to restrict cattle queries to, or None when the actor sees everything."""
        return None if self.role.sees_all_cattle() else self.user_id


def ensure_cattle_access(actor: Actor, cattle: Cattle | None, *, cattle_id: UUID) -> Cattle:
    if cattle is None or cattle.organization_id != actor.organization_id:
        raise NotFound(f"Cattle {cattle_id} not found")
    if actor.role is Role.USER and cattle.assigned_user_id != actor.user_id:
        raise PermissionDenied("Access denied")
    return cattle


def ensure_admin(actor: Actor, message: str = "Admin access required") -> None:
    if not actor.is_admin:
        raise PermissionDenied(message)
