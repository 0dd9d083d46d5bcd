from __future__ import annotations

from dataclasses import dataclass

from src.application.access import Actor, ensure_admin
from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.user import User


@dataclass(slots=True)
class ListUsersResult:
    users: list[User]
    total: int
    page: int
    limit: int


async def execute(
    *, uow: UnitOfWork, actor: Actor, page: int = 1, limit: int = 20
) -> ListUsersResult:
    ensure_admin(actor, "Only admins can list users")
    if page < 1 or limit < 1 or limit > 100:
        raise ValidationError("Invalid pagination parameters")
    users, total = await uow.users.list_by_organization(
        actor.organization_id, page=page, limit=limit
    )
    return ListUsersResult(users=users, total=total, page=page, limit=limit)
