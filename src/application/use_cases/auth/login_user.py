from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import AuthError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.role import Role
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher


@dataclass(slots=True)
class LoginInput:
    username: str
    password: str


@dataclass(slots=True)
class LoginResult:
    access_token: str
    token_type: str
    user_id: UUID
    username: str
    organization_id: UUID
    role: Role


async def execute(
    *,
    uow: UnitOfWork,
    payload: LoginInput,
    password_hasher: PasswordHasher,
    jwt_service: JWTService,
) -> LoginResult:
    user = await uow.users.get_by_username(payload.username.strip())
    if not user or not user.is_active:
        raise AuthError("Invalid credentials")
    if not password_hasher.verify(payload.password, user.hashed_password):
        raise AuthError("Invalid credentials")
    if password_hasher.needs_rehash(user.hashed_password):
        await uow.users.update_password(user.id, password_hasher.hash(payload.password))
        await uow.commit()

    token = jwt_service.create_access_token(
        subject=user.id,
        organization_id=user.organization_id,
        role=user.role,
    )
    return LoginResult(
        access_token=token,
        token_type="bearer",
        user_id=user.id,
        username=user.username,
        organization_id=user.organization_id,
        role=user.role,
    )
