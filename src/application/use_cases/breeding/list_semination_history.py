from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.access import Actor, ensure_cattle_access
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.pregnancy_record import PregnancyRecord
from src.domain.models.semination_record import SeminationRecord


@dataclass(slots=True)
class SeminationHistoryEntry:
    semination: SeminationRecord
    pregnancy: PregnancyRecord | None = None


async def execute(uow: UnitOfWork, actor: Actor, cattle_id: UUID) -> list[SeminationHistoryEntry]:
    cattle = await uow.cattle.get(actor.organization_id, cattle_id)
    ensure_cattle_access(actor, cattle, cattle_id=cattle_id)

    seminations = await uow.semination_records.list_for_cattle(actor.organization_id, cattle_id)
    pregnancies = await uow.pregnancy_records.list_for_cattle(actor.organization_id, cattle_id)
    by_semination = {p.semination_record_id: p for p in pregnancies}
    return [
        SeminationHistoryEntry(semination=record, pregnancy=by_semination.get(record.id))
        for record in seminations
    ]
