from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.semination_record import SeminationRecord


class SeminationRecordsRepository(Protocol):
    async def add(self, record: SeminationRecord) -> SeminationRecord: ...

    async def get(
        self, organization_id: UUID, record_id: UUID, *, for_update: bool = False
    ) -> SeminationRecord | None: ...

    async def list_for_cattle(
        self, organization_id: UUID, cattle_id: UUID
    ) -> list[SeminationRecord]: ...

    async def has_unresolved(self, organization_id: UUID, cattle_id: UUID) -> bool: ...

    async def record_outcome(self, record: SeminationRecord) -> bool: ...

    async def list_pending_checks(
        self,
        organization_id: UUID,
        today: date,
        *,
        assigned_user_id: UUID | None = None,
    ) -> list[SeminationRecord]: ...

    async def count(self, organization_id: UUID) -> int: ...

    async def mark_reminded(self, record_id: UUID, day: date) -> None: ...
