from __future__ import annotations


class NotificationType:
    """Canonical notification type names shared with the mobile app."""

    PREGNANCY_CHECK_DUE = "PREGNANCY_CHECK_DUE"
    SEPARATION_REMINDER = "SEPARATION_REMINDER"
    MILESTONE_REMINDER = "MILESTONE_REMINDER"
    PREGNANCY_CONFIRMED = "PREGNANCY_CONFIRMED"
    CALF_BORN = "CALF_BORN"

