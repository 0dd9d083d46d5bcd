from __future__ import annotations

from datetime import date

from src.application.access import Actor
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.semination_record import SeminationRecord
from src.utils.datetime_tz import utc_today


async def execute(
    uow: UnitOfWork, actor: Actor, *, today: date | None = None
) -> list[SeminationRecord]:
    """Unchecked seminations whose check date has arrived, oldest first."""
    return await uow.semination_records.list_pending_checks(
        actor.organization_id,
        today or utc_today(),
        assigned_user_id=actor.assigned_filter(),
    )
