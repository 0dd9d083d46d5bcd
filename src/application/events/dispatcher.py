from __future__ import annotations

import logging
from typing import Iterable

from src.application.events.models import LifecycleNotificationEvent
from src.application.notifications.factory import build_notification
from src.infrastructure.repos.device_tokens_sqlalchemy import DeviceTokensSQLAlchemyRepository
from src.infrastructure.repos.notifications_sqlalchemy import NotificationsSQLAlchemyRepository
from src.infrastructure.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


async def dispatch_events(session_factory, events: Iterable[object], push_sender=None) -> None:
    """
    Dispatch events post-commit. Uses a transient session for sending notifications.
    Safe to call in a background task.
    """
    events = list(events)
    if not events:
        return

    async with session_factory() as session:
        notification_service = NotificationService(
            notification_repo=NotificationsSQLAlchemyRepository(session),
            device_tokens_repo=DeviceTokensSQLAlchemyRepository(session),
            push_sender=push_sender,
        )

        for event in events:
            try:
                if isinstance(event, LifecycleNotificationEvent):
                    await _handle_lifecycle_notification(notification_service, event)
                else:
                    logger.warning("No handler for event %s", type(event).__name__)
            except Exception as e:
                logger.error(
                    "Error dispatching event %s: %s", type(event).__name__, e, exc_info=True
                )


async def _handle_lifecycle_notification(
    notification_service: NotificationService, event: LifecycleNotificationEvent
) -> None:
    pending = event.notification
    built = build_notification(pending.type, cattle_id=pending.cattle_id, **pending.params)
    await notification_service.send_notification(
        organization_id=pending.organization_id,
        user_id=pending.user_id,
        cattle_id=pending.cattle_id,
        type=built.type,
        title=built.title,
        message=built.message,
        data=built.data,
    )
