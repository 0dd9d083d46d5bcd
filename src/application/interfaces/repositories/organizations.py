from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.organization import Organization


class OrganizationRepository(Protocol):
    async def add(self, organization: Organization) -> Organization: ...

    async def get(self, organization_id: UUID) -> Organization | None: ...

    async def get_by_name(self, name: str) -> Organization | None: ...
