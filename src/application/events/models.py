from __future__ import annotations

from dataclasses import dataclass

from src.application.breeding.lifecycle import NotificationToEmit


@dataclass(frozen=True)
class LifecycleNotificationEvent:
    """Notification produced by a lifecycle transition, sent after commit."""

    notification: NotificationToEmit
