from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.application.access import Actor
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.pregnancy_record import PregnancyStatus
from src.utils.datetime_tz import utc_today


@dataclass(slots=True)
class PregnancyStats:
    total: int
    in_progress: int
    delivered: int
    separated: int
    overdue: int


async def execute(uow: UnitOfWork, actor: Actor, *, today: date | None = None) -> PregnancyStats:
    assigned = actor.assigned_filter()
    counts = await uow.pregnancy_records.count_by_status(
        actor.organization_id, assigned_user_id=assigned
    )
    overdue = await uow.pregnancy_records.count_overdue(
        actor.organization_id, today or utc_today(), assigned_user_id=assigned
    )
    in_progress = counts.get(PregnancyStatus.IN_PROGRESS.value, 0)
    delivered = counts.get(PregnancyStatus.DELIVERED.value, 0)
    separated = counts.get(PregnancyStatus.SEPARATED.value, 0)
    return PregnancyStats(
        total=in_progress + delivered + separated,
        in_progress=in_progress,
        delivered=delivered,
        separated=separated,
        overdue=overdue,
    )
