from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.user import User


class UserRepository(Protocol):
    async def add(self, user: User) -> User: ...

    async def get(self, user_id: UUID) -> User | None: ...

    async def get_in_organization(self, organization_id: UUID, user_id: UUID) -> User | None: ...

    async def get_by_username(self, username: str) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def list_by_organization(
        self,
        organization_id: UUID,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[User], int]: ...

    async def update_password(self, user_id: UUID, hashed_password: str) -> None: ...
