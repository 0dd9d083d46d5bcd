from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.access import Actor, ensure_cattle_access
from src.application.breeding.effects import apply_effects
from src.application.breeding.lifecycle import (
    CalfAttributes,
    DeliveryRecorded,
    apply_lifecycle_transition,
)
from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.cattle import Cattle
from src.domain.models.pregnancy_record import PregnancyRecord
from src.utils.datetime_tz import utc_today


@dataclass(slots=True)
class RecordDeliveryInput:
    pregnancy_record_id: UUID
    actual_delivery_date: date
    calf_tag_number: str
    calf_name: str
    calf_gender: str
    calf_breed: str
    notes: str | None = None


@dataclass(slots=True)
class RecordDeliveryResult:
    pregnancy_record: PregnancyRecord
    calf: Cattle


async def execute(
    uow: UnitOfWork,
    actor: Actor,
    payload: RecordDeliveryInput,
    *,
    today: date | None = None,
) -> RecordDeliveryResult:
    pregnancy = await uow.pregnancy_records.get(
        actor.organization_id, payload.pregnancy_record_id, for_update=True
    )
    if pregnancy is None:
        raise NotFound(f"Pregnancy record {payload.pregnancy_record_id} not found")
    dam = await uow.cattle.get(actor.organization_id, pregnancy.cattle_id, for_update=True)
    dam = ensure_cattle_access(actor, dam, cattle_id=pregnancy.cattle_id)
    semination = await uow.semination_records.get(
        actor.organization_id, pregnancy.semination_record_id
    )

    effects = apply_lifecycle_transition(
        DeliveryRecorded(
            dam=dam,
            pregnancy=pregnancy,
            actual_delivery_date=payload.actual_delivery_date,
            calf=CalfAttributes(
                tag_number=payload.calf_tag_number,
                name=payload.calf_name,
                gender=payload.calf_gender,
                breed=payload.calf_breed,
            ),
            actor_user_id=actor.user_id,
            notes=payload.notes,
            semination_date=semination.semination_date if semination else None,
            today=today or utc_today(),
        )
    )
    await apply_effects(uow, effects)
    await uow.commit()
    return RecordDeliveryResult(
        pregnancy_record=effects.record_updates[0].record,
        calf=effects.cattle_to_add[0],
    )
