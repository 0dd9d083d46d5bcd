from __future__ import annotations

from uuid import UUID

from src.application.access import Actor, ensure_cattle_access
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.pregnancy_record import PregnancyRecord


async def execute(uow: UnitOfWork, actor: Actor, cattle_id: UUID) -> list[PregnancyRecord]:
    cattle = await uow.cattle.get(actor.organization_id, cattle_id)
    ensure_cattle_access(actor, cattle, cattle_id=cattle_id)
    return await uow.pregnancy_records.list_for_cattle(actor.organization_id, cattle_id)
