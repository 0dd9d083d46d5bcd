from __future__ import annotations

from dataclasses import dataclass

from src.application.access import Actor
from src.application.errors import ConflictError, PermissionDenied
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.user import User
from src.domain.value_objects.role import Role
from src.infrastructure.auth.password import PasswordHasher


@dataclass(slots=True)
class RegisterUserInput:
    username: str
    email: str
    password: str
    role: Role = Role.USER
    is_active: bool = True


async def execute(
    *,
    uow: UnitOfWork,
    actor: Actor,
    payload: RegisterUserInput,
    password_hasher: PasswordHasher,
) -> User:
    """Create a user inside the admin's own organization."""
    if not actor.role.can_manage_users():
        raise PermissionDenied("Only admins can create users")
    if await uow.users.get_by_username(payload.username):
        raise ConflictError("Username already registered")
    if await uow.users.get_by_email(payload.email):
        raise ConflictError("Email already registered")
    user = User.create(
        organization_id=actor.organization_id,
        username=payload.username,
        email=payload.email,
        hashed_password=password_hasher.hash(payload.password),
        role=payload.role,
        is_active=payload.is_active,
    )
    created = await uow.users.add(user)
    await uow.commit()
    return created
