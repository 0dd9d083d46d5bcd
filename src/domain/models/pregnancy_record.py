from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from uuid import UUID, uuid4

from src.utils.datetime_tz import add_months

GESTATION_MONTHS = 9
SEPARATION_AFTER_DAYS = 15


class PregnancyStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    DELIVERED = "DELIVERED"
    SEPARATED = "SEPARATED"


@dataclass(slots=True)
class PregnancyRecord:
    id: UUID
    organization_id: UUID
    cattle_id: UUID
    semination_record_id: UUID
    expected_delivery_date: date
    created_by_id: UUID

    status: str = PregnancyStatus.IN_PROGRESS.value
    actual_delivery_date: date | None = None
    calf_id: UUID | None = None
    notes: str | None = None
    last_reminded_on: date | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        organization_id: UUID,
        cattle_id: UUID,
        semination_record_id: UUID,
        semination_date: date,
        created_by_id: UUID,
        notes: str | None = None,
    ) -> PregnancyRecord:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            organization_id=organization_id,
            cattle_id=cattle_id,
            semination_record_id=semination_record_id,
            expected_delivery_date=add_months(semination_date, GESTATION_MONTHS),
            created_by_id=created_by_id,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    def separation_eligible_date(self) -> date | None:
        if self.actual_delivery_date is None:
            return None
        return self.actual_delivery_date + timedelta(days=SEPARATION_AFTER_DAYS)
