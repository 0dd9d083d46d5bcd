from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.access import Actor, ensure_cattle_access
from src.application.breeding.effects import apply_effects
from src.application.breeding.lifecycle import SeminationRecorded, apply_lifecycle_transition
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.semination_record import SeminationRecord


@dataclass(slots=True)
class RecordSeminationInput:
    cattle_id: UUID
    semination_date: date
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    actor: Actor,
    payload: RecordSeminationInput,
) -> SeminationRecord:
    # Row lock on the dam serialises concurrent seminations of the same animal
    cattle = await uow.cattle.get(actor.organization_id, payload.cattle_id, for_update=True)
    cattle = ensure_cattle_access(actor, cattle, cattle_id=payload.cattle_id)

    has_open_thread = await uow.semination_records.has_unresolved(
        actor.organization_id, cattle.id
    ) or await uow.pregnancy_records.has_in_progress(actor.organization_id, cattle.id)

    effects = apply_lifecycle_transition(
        SeminationRecorded(
            cattle=cattle,
            semination_date=payload.semination_date,
            actor_user_id=actor.user_id,
            notes=payload.notes,
            has_open_thread=has_open_thread,
        )
    )
    await apply_effects(uow, effects)
    await uow.commit()
    return effects.records_to_add[0]
