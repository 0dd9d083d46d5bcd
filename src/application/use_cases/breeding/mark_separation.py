from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.access import Actor, ensure_cattle_access
from src.application.breeding.effects import apply_effects
from src.application.breeding.lifecycle import SeparationMarked, apply_lifecycle_transition
from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.pregnancy_record import PregnancyRecord
from src.utils.datetime_tz import utc_today


@dataclass(slots=True)
class MarkSeparationInput:
    pregnancy_record_id: UUID
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    actor: Actor,
    payload: MarkSeparationInput,
    *,
    today: date | None = None,
) -> PregnancyRecord:
    pregnancy = await uow.pregnancy_records.get(
        actor.organization_id, payload.pregnancy_record_id, for_update=True
    )
    if pregnancy is None:
        raise NotFound(f"Pregnancy record {payload.pregnancy_record_id} not found")
    dam = await uow.cattle.get(actor.organization_id, pregnancy.cattle_id)
    dam = ensure_cattle_access(actor, dam, cattle_id=pregnancy.cattle_id)
    calf = (
        await uow.cattle.get(actor.organization_id, pregnancy.calf_id)
        if pregnancy.calf_id
        else None
    )

    effects = apply_lifecycle_transition(
        SeparationMarked(
            dam=dam,
            pregnancy=pregnancy,
            calf=calf,
            today=today or utc_today(),
            actor_user_id=actor.user_id,
            notes=payload.notes,
        )
    )
    await apply_effects(uow, effects)
    await uow.commit()
    return effects.record_updates[0].record
