from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.utils.datetime_tz import format_day_date

from .types import NotificationType


@dataclass
class BuiltNotification:
    type: str
    title: str
    message: str
    data: dict[str, Any]


def _cattle_label(name: str | None, tag: str | None) -> str:
    if name and tag:
        return f"{name} ({tag})"
    return name or tag or "Cattle"


def _str_or_none(value: Any) -> str | None:
    return str(value) if value is not None else None


def build_notification(ntype: str, **kwargs: Any) -> BuiltNotification:
    """
    Central place to build notification title/message/data from templates.
    Push payload data values are strings, as FCM requires.
    """
    cattle_id = _str_or_none(kwargs.get("cattle_id"))
    cattle_name: str | None = kwargs.get("cattle_name")
    cattle_tag: str | None = kwargs.get("cattle_tag")

    if ntype == NotificationType.PREGNANCY_CHECK_DUE:
        check_date = kwargs.get("check_date")
        title = "Pregnancy Check Due"
        message = f"Pregnancy check is due for {_cattle_label(cattle_name, cattle_tag)}"
        if check_date is not None:
            message += f" since {format_day_date(check_date)}"
        data = {
            "type": ntype,
            "cattle_id": cattle_id,
            "cattle_name": cattle_name,
            "cattle_tag": cattle_tag,
            "semination_record_id": _str_or_none(kwargs.get("semination_record_id")),
            "check_date": _str_or_none(check_date),
        }
        return BuiltNotification(ntype, title, message, data)

    if ntype == NotificationType.SEPARATION_REMINDER:
        calf_name: str | None = kwargs.get("calf_name")
        title = "Separation Reminder"
        message = f"Time to separate calf {calf_name or 'calf'} from {cattle_name or cattle_tag}"
        data = {
            "type": ntype,
            "cattle_id": cattle_id,
            "cattle_name": cattle_name,
            "calf_id": _str_or_none(kwargs.get("calf_id")),
            "calf_name": calf_name,
            "pregnancy_record_id": _str_or_none(kwargs.get("pregnancy_record_id")),
        }
        return BuiltNotification(ntype, title, message, data)

    if ntype == NotificationType.MILESTONE_REMINDER:
        days = int(kwargs.get("days_until_delivery", 0) or 0)
        expected = kwargs.get("expected_delivery_date")
        title = "Pregnancy Milestone"
        if days <= 0:
            message = f"{cattle_name or cattle_tag} is expected to deliver today"
        else:
            message = f"{cattle_name or cattle_tag} is expected to deliver in {days} day(s)"
        data = {
            "type": ntype,
            "cattle_id": cattle_id,
            "cattle_name": cattle_name,
            "cattle_tag": cattle_tag,
            "expected_delivery_date": _str_or_none(expected),
            "days_until_delivery": str(days),
            "pregnancy_record_id": _str_or_none(kwargs.get("pregnancy_record_id")),
        }
        return BuiltNotification(ntype, title, message, data)

    if ntype == NotificationType.PREGNANCY_CONFIRMED:
        expected = kwargs.get("expected_delivery_date")
        title = f"🐄 Pregnancy confirmed: {_cattle_label(cattle_name, cattle_tag)}"
        message = f"Expected delivery {format_day_date(expected)}"
        data = {
            "type": ntype,
            "cattle_id": cattle_id,
            "cattle_name": cattle_name,
            "cattle_tag": cattle_tag,
            "expected_delivery_date": _str_or_none(expected),
            "pregnancy_record_id": _str_or_none(kwargs.get("pregnancy_record_id")),
        }
        return BuiltNotification(ntype, title, message, data)

    if ntype == NotificationType.CALF_BORN:
        calf_name: str | None = kwargs.get("calf_name")
        calf_tag: str | None = kwargs.get("calf_tag")
        delivery_date = kwargs.get("delivery_date")
        title = f"🍼 New calf: {_cattle_label(calf_name, calf_tag)}"
        message = f"{cattle_name or 'Dam'} delivered on {format_day_date(delivery_date)}"
        data = {
            "type": ntype,
            "cattle_id": cattle_id,
            "cattle_name": cattle_name,
            "calf_id": _str_or_none(kwargs.get("calf_id")),
            "calf_name": calf_name,
            "calf_tag": calf_tag,
            "delivery_date": _str_or_none(delivery_date),
        }
        return BuiltNotification(ntype, title, message, data)

    raise ValueError(f"Unknown notification type: {ntype}")
