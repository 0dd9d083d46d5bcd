from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from src.application.breeding.lifecycle import NotificationToEmit
from src.application.notifications.factory import build_notification
from src.application.notifications.types import NotificationType
from src.domain.models.pregnancy_record import SEPARATION_AFTER_DAYS, PregnancyStatus
from src.domain.value_objects.cattle_status import CattleStatus
from src.infrastructure.db.orm.cattle import CattleORM
from src.infrastructure.db.orm.pregnancy_record import PregnancyRecordORM
from src.infrastructure.db.orm.semination_record import SeminationRecordORM
from src.infrastructure.repos.device_tokens_sqlalchemy import DeviceTokensSQLAlchemyRepository
from src.infrastructure.repos.notifications_sqlalchemy import NotificationsSQLAlchemyRepository
from src.infrastructure.repos.pregnancy_records_sqlalchemy import (
    PregnancyRecordsSQLAlchemyRepository,
)
from src.infrastructure.repos.semination_records_sqlalchemy import (
    SeminationRecordsSQLAlchemyRepository,
)
from src.infrastructure.services.notification_service import NotificationService
from src.utils.datetime_tz import utc_today

logger = logging.getLogger(__name__)

MILESTONE_WINDOW_DAYS = 7


@dataclass(frozen=True)
class _Reminder:
    record_id: UUID
    notification: NotificationToEmit


def _not_reminded_today(column, today: date):
    return or_(column.is_(None), column < today)


async def check_pending_pregnancy_checks(
    session_factory, *, today: date | None = None, push_sender=None
) -> int:
    """Remind about seminations whose check date has passed without a recorded result."""
    today = today or utc_today()
    async with session_factory() as session:
        stmt = (
            select(SeminationRecordORM, CattleORM)
            .join(CattleORM, CattleORM.id == SeminationRecordORM.cattle_id)
            .where(SeminationRecordORM.is_pregnant.is_(None))
            .where(SeminationRecordORM.check_date <= today)
            .where(_not_reminded_today(SeminationRecordORM.last_reminded_on, today))
            .where(CattleORM.status != CattleStatus.DECEASED.value)
            .order_by(SeminationRecordORM.check_date)
        )
        result = await session.execute(stmt)
        reminders = [
            _Reminder(
                record_id=record.id,
                notification=NotificationToEmit(
                    type=NotificationType.PREGNANCY_CHECK_DUE,
                    organization_id=record.organization_id,
                    user_id=cattle.assigned_user_id or record.created_by_id,
                    cattle_id=cattle.id,
                    params={
                        "cattle_name": cattle.name,
                        "cattle_tag": cattle.tag_number,
                        "check_date": record.check_date,
                        "semination_record_id": record.id,
                    },
                ),
            )
            for record, cattle in result.all()
        ]
        sent = await _send_reminders(
            session,
            reminders,
            today,
            mark_reminded=SeminationRecordsSQLAlchemyRepository(session).mark_reminded,
            push_sender=push_sender,
        )
    logger.info("Pregnancy check reminders: %d of %d sent", sent, len(reminders))
    return sent


async def check_due_separations(
    session_factory, *, today: date | None = None, push_sender=None
) -> int:
    """Remind about delivered calves that are old enough to leave their dam."""
    today = today or utc_today()
    cutoff = today - timedelta(days=SEPARATION_AFTER_DAYS)
    calf = aliased(CattleORM)
    async with session_factory() as session:
        stmt = (
            select(PregnancyRecordORM, CattleORM, calf)
            .join(CattleORM, CattleORM.id == PregnancyRecordORM.cattle_id)
            .outerjoin(calf, calf.id == PregnancyRecordORM.calf_id)
            .where(PregnancyRecordORM.status == PregnancyStatus.DELIVERED.value)
            .where(PregnancyRecordORM.actual_delivery_date <= cutoff)
            .where(_not_reminded_today(PregnancyRecordORM.last_reminded_on, today))
            .order_by(PregnancyRecordORM.actual_delivery_date)
        )
        result = await session.execute(stmt)
        reminders = [
            _Reminder(
                record_id=record.id,
                notification=NotificationToEmit(
                    type=NotificationType.SEPARATION_REMINDER,
                    organization_id=record.organization_id,
                    user_id=dam.assigned_user_id or record.created_by_id,
                    cattle_id=dam.id,
                    params={
                        "cattle_name": dam.name,
                        "cattle_tag": dam.tag_number,
                        "calf_id": record.calf_id,
                        "calf_name": calf_row.name if calf_row else None,
                        "pregnancy_record_id": record.id,
                    },
                ),
            )
            for record, dam, calf_row in result.all()
        ]
        sent = await _send_reminders(
            session,
            reminders,
            today,
            mark_reminded=PregnancyRecordsSQLAlchemyRepository(session).mark_reminded,
            push_sender=push_sender,
        )
    logger.info("Separation reminders: %d of %d sent", sent, len(reminders))
    return sent


async def check_upcoming_deliveries(
    session_factory, *, today: date | None = None, push_sender=None
) -> int:
    """Remind about pregnancies expected to deliver within the coming week."""
    today = today or utc_today()
    horizon = today + timedelta(days=MILESTONE_WINDOW_DAYS)
    async with session_factory() as session:
        stmt = (
            select(PregnancyRecordORM, CattleORM)
            .join(CattleORM, CattleORM.id == PregnancyRecordORM.cattle_id)
            .where(PregnancyRecordORM.status == PregnancyStatus.IN_PROGRESS.value)
            .where(PregnancyRecordORM.expected_delivery_date >= today)
            .where(PregnancyRecordORM.expected_delivery_date <= horizon)
            .where(_not_reminded_today(PregnancyRecordORM.last_reminded_on, today))
            .order_by(PregnancyRecordORM.expected_delivery_date)
        )
        result = await session.execute(stmt)
        reminders = [
            _Reminder(
                record_id=record.id,
                notification=NotificationToEmit(
                    type=NotificationType.MILESTONE_REMINDER,
                    organization_id=record.organization_id,
                    user_id=cattle.assigned_user_id or record.created_by_id,
                    cattle_id=cattle.id,
                    params={
                        "cattle_name": cattle.name,
                        "cattle_tag": cattle.tag_number,
                        "expected_delivery_date": record.expected_delivery_date,
                        "days_until_delivery": (record.expected_delivery_date - today).days,
                        "pregnancy_record_id": record.id,
                    },
                ),
            )
            for record, cattle in result.all()
        ]
        sent = await _send_reminders(
            session,
            reminders,
            today,
            mark_reminded=PregnancyRecordsSQLAlchemyRepository(session).mark_reminded,
            push_sender=push_sender,
        )
    logger.info("Delivery milestone reminders: %d of %d sent", sent, len(reminders))
    return sent


async def _send_reminders(
    session: AsyncSession,
    reminders: list[_Reminder],
    today: date,
    *,
    mark_reminded,
    push_sender,
) -> int:
    if not reminders:
        return 0
    notification_service = NotificationService(
        notification_repo=NotificationsSQLAlchemyRepository(session),
        device_tokens_repo=DeviceTokensSQLAlchemyRepository(session),
        push_sender=push_sender,
    )
    sent = 0
    for reminder in reminders:
        pending = reminder.notification
        try:
            built = build_notification(pending.type, cattle_id=pending.cattle_id, **pending.params)
            # Stamped in the same commit as the stored notification
            await mark_reminded(reminder.record_id, today)
            await notification_service.send_notification(
                organization_id=pending.organization_id,
                user_id=pending.user_id,
                cattle_id=pending.cattle_id,
                type=built.type,
                title=built.title,
                message=built.message,
                data=built.data,
            )
            sent += 1
        except Exception as exc:
            await session.rollback()
            logger.error(
                "Failed sending %s reminder for record %s: %s",
                pending.type,
                reminder.record_id,
                exc,
                exc_info=True,
            )
    return sent
