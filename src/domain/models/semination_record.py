from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from uuid import UUID, uuid4

PREGNANCY_CHECK_AFTER_DAYS = 15


@dataclass(slots=True)
class SeminationRecord:
    id: UUID
    organization_id: UUID
    cattle_id: UUID
    semination_date: date
    check_date: date
    created_by_id: UUID

    # None until the pregnancy check is recorded
    is_pregnant: bool | None = None
    checked_at: datetime | None = None
    notes: str | None = None
    last_reminded_on: date | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        organization_id: UUID,
        cattle_id: UUID,
        semination_date: date,
        created_by_id: UUID,
        notes: str | None = None,
    ) -> SeminationRecord:
        return cls(
            id=uuid4(),
            organization_id=organization_id,
            cattle_id=cattle_id,
            semination_date=semination_date,
            check_date=semination_date + timedelta(days=PREGNANCY_CHECK_AFTER_DAYS),
            created_by_id=created_by_id,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_checked(self) -> bool:
        return self.is_pregnant is not None
