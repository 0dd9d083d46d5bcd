from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.pregnancy_record import PregnancyRecord


class PregnancyRecordsRepository(Protocol):
    async def add(self, record: PregnancyRecord) -> PregnancyRecord: ...

    async def get(
        self, organization_id: UUID, record_id: UUID, *, for_update: bool = False
    ) -> PregnancyRecord | None: ...

    async def list_for_cattle(
        self, organization_id: UUID, cattle_id: UUID
    ) -> list[PregnancyRecord]: ...

    async def has_in_progress(self, organization_id: UUID, cattle_id: UUID) -> bool: ...

    async def transition(self, record: PregnancyRecord, expected_status: str) -> bool: ...

    async def count_by_status(
        self, organization_id: UUID, *, assigned_user_id: UUID | None = None
    ) -> dict[str, int]: ...

    async def count_overdue(
        self, organization_id: UUID, today: date, *, assigned_user_id: UUID | None = None
    ) -> int: ...

    async def mark_reminded(self, record_id: UUID, day: date) -> None: ...
