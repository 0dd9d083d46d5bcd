from __future__ import annotations

import logging
from uuid import UUID

from src.domain.models.notification import Notification
from src.infrastructure.repos.device_tokens_sqlalchemy import DeviceTokensSQLAlchemyRepository
from src.infrastructure.repos.notifications_sqlalchemy import NotificationsSQLAlchemyRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Persists notifications and delivers them to the user's devices via push."""

    def __init__(
        self,
        notification_repo: NotificationsSQLAlchemyRepository,
        device_tokens_repo: DeviceTokensSQLAlchemyRepository | None = None,
        push_sender: object | None = None,
    ) -> None:
        self.notification_repo = notification_repo
        self.device_tokens_repo = device_tokens_repo
        self.push_sender = push_sender

    async def send_notification(
        self,
        organization_id: UUID,
        user_id: UUID,
        type: str,
        title: str,
        message: str,
        cattle_id: UUID | None = None,
        data: dict | None = None,
    ) -> Notification:
        """
        Persist a notification, then attempt push delivery.
        The stored notification is committed before delivery, so a push failure
        never removes it.
        """
        notification = Notification.create(
            organization_id=organization_id,
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            cattle_id=cattle_id,
            data=data,
        )
        saved = await self.persist(notification)
        await self.notification_repo.session.commit()

        metadata = {
            "notification_id": str(saved.id),
            "type": saved.type,
            "organization_id": str(saved.organization_id),
        }
        if saved.cattle_id is not None:
            metadata["cattle_id"] = str(saved.cattle_id)
        for key, value in (data or {}).items():
            if value is not None:
                metadata.setdefault(key, str(value))
        await self.deliver(user_id, saved.title, saved.message, metadata)
        return saved

    async def persist(self, notification: Notification) -> Notification:
        saved = await self.notification_repo.add(notification)
        logger.info(
            "Notification created: id=%s organization=%s user=%s type=%s",
            saved.id,
            saved.organization_id,
            saved.user_id,
            saved.type,
        )
        return saved

    async def deliver(self, user_id: UUID, title: str, body: str, metadata: dict) -> bool:
        """Fire-and-forget push delivery. Failures are logged, never raised or retried."""
        if not self.push_sender or not self.device_tokens_repo:
            return False
        try:
            tokens = await self.device_tokens_repo.active_tokens_for_user(user_id)
            if not tokens:
                logger.debug("No push tokens for user %s", user_id)
                return False
            invalid_tokens = await self.push_sender.send_to_tokens(
                tokens=tokens, title=title, body=body, data=metadata
            )
        except Exception as e:
            logger.error(
                "Error sending push notification to user %s: %s", user_id, e, exc_info=True
            )
            return False

        if invalid_tokens:
            try:
                disabled = await self.device_tokens_repo.disable_tokens(invalid_tokens)
                await self.device_tokens_repo.session.commit()
                logger.info("Disabled %s invalid push tokens for user %s", disabled, user_id)
            except Exception as disable_err:
                logger.error(
                    "Error disabling invalid tokens %s: %s",
                    invalid_tokens,
                    disable_err,
                    exc_info=True,
                )
        logger.info("Notification sent via Push: user=%s tokens=%s", user_id, len(tokens))
        return len(invalid_tokens or []) < len(tokens)
