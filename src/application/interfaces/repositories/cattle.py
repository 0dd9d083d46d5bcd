from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.cattle import Cattle


class CattleRepository(Protocol):
    async def add(self, cattle: Cattle) -> Cattle: ...

    async def get(
        self, organization_id: UUID, cattle_id: UUID, *, for_update: bool = False
    ) -> Cattle | None: ...

    async def get_by_tag(self, organization_id: UUID, tag_number: str) -> Cattle | None: ...

    async def list(
        self,
        organization_id: UUID,
        *,
        assigned_user_id: UUID | None = None,
        status: str | None = None,
        search: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Cattle]: ...

    async def count(
        self,
        organization_id: UUID,
        *,
        assigned_user_id: UUID | None = None,
        status: str | None = None,
        search: str | None = None,
    ) -> int: ...

    async def update(
        self,
        organization_id: UUID,
        cattle_id: UUID,
        data: dict,
        expected_version: int,
    ) -> Cattle | None: ...

    async def update_status(self, cattle_id: UUID, status: str) -> None: ...

    async def count_by_status(self, organization_id: UUID) -> dict[str, int]: ...
