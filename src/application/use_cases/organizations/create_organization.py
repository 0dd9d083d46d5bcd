from __future__ import annotations

from dataclasses import dataclass

from src.application.errors import ConflictError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.organization import Organization
from src.domain.models.user import User
from src.domain.value_objects.role import Role
from src.infrastructure.auth.password import PasswordHasher


@dataclass(slots=True)
class CreateOrganizationInput:
    name: str
    admin_username: str
    admin_email: str
    admin_password: str
    description: str | None = None


@dataclass(slots=True)
class CreateOrganizationResult:
    organization: Organization
    admin: User


async def execute(
    *,
    uow: UnitOfWork,
    payload: CreateOrganizationInput,
    password_hasher: PasswordHasher,
) -> CreateOrganizationResult:
    """Bootstrap a farm: the organization plus its first ADMIN, in one commit."""
    if await uow.organizations.get_by_name(payload.name):
        raise ConflictError("Organization name already exists")
    if await uow.users.get_by_username(payload.admin_username):
        raise ConflictError("Username already registered")

    organization = await uow.organizations.add(
        Organization.create(name=payload.name, description=payload.description)
    )
    admin = await uow.users.add(
        User.create(
            organization_id=organization.id,
            username=payload.admin_username,
            email=payload.admin_email,
            hashed_password=password_hasher.hash(payload.admin_password),
            role=Role.ADMIN,
        )
    )
    await uow.commit()
    return CreateOrganizationResult(organization=organization, admin=admin)
