from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.application.access import Actor, ensure_cattle_access
from src.application.breeding.effects import apply_effects
from src.application.breeding.lifecycle import PregnancyChecked, apply_lifecycle_transition
from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.pregnancy_record import PregnancyRecord
from src.domain.models.semination_record import SeminationRecord
from src.utils.datetime_tz import utc_now


@dataclass(slots=True)
class CheckPregnancyInput:
    semination_record_id: UUID
    is_pregnant: bool
    notes: str | None = None


@dataclass(slots=True)
class CheckPregnancyResult:
    semination_record: SeminationRecord
    pregnancy_record: PregnancyRecord | None


async def execute(
    uow: UnitOfWork,
    actor: Actor,
    payload: CheckPregnancyInput,
    *,
    now: datetime | None = None,
) -> CheckPregnancyResult:
    record = await uow.semination_records.get(
        actor.organization_id, payload.semination_record_id, for_update=True
    )
    if record is None:
        raise NotFound(f"Semination record {payload.semination_record_id} not found")
    cattle = await uow.cattle.get(actor.organization_id, record.cattle_id, for_update=True)
    cattle = ensure_cattle_access(actor, cattle, cattle_id=record.cattle_id)

    effects = apply_lifecycle_transition(
        PregnancyChecked(
            cattle=cattle,
            record=record,
            is_pregnant=payload.is_pregnant,
            checked_at=now or utc_now(),
            actor_user_id=actor.user_id,
            notes=payload.notes,
        )
    )
    await apply_effects(uow, effects)
    await uow.commit()

    pregnancy = next(
        (r for r in effects.records_to_add if isinstance(r, PregnancyRecord)), None
    )
    return CheckPregnancyResult(
        semination_record=effects.record_updates[0].record,
        pregnancy_record=pregnancy,
    )
