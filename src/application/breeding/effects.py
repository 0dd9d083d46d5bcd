from __future__ import annotations

import logging

from src.application.breeding.lifecycle import LifecycleEffects
from src.application.errors import InvalidState
from src.application.events.models import LifecycleNotificationEvent
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.pregnancy_record import PregnancyRecord
from src.domain.models.semination_record import SeminationRecord

logger = logging.getLogger(__name__)


async def apply_effects(uow: UnitOfWork, effects: LifecycleEffects) -> None:
    """Write one transition's effects through the unit of work (caller commits).

    Record updates are compare-and-set writes and run before any new record is
    inserted, so the loser of a race fails with InvalidState instead of tripping
    a unique constraint. New calves go first because delivered pregnancies
    reference them.
    """
    for calf in effects.cattle_to_add:
        await uow.cattle.add(calf)

    for update in effects.record_updates:
        record = update.record
        if isinstance(record, SeminationRecord):
            applied = await uow.semination_records.record_outcome(record)
        else:
            applied = await uow.pregnancy_records.transition(record, update.expected)
        if not applied:
            logger.info("Concurrent lifecycle update lost on record %s", record.id)
            raise InvalidState(
                "Record was modified concurrently", details={"record_id": str(record.id)}
            )

    for record in effects.records_to_add:
        if isinstance(record, SeminationRecord):
            await uow.semination_records.add(record)
        elif isinstance(record, PregnancyRecord):
            await uow.pregnancy_records.add(record)

    for status_update in effects.cattle_status_updates:
        await uow.cattle.update_status(status_update.cattle_id, status_update.status)

    for notification in effects.notifications:
        uow.add_event(LifecycleNotificationEvent(notification=notification))
