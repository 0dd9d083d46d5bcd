"""Breeding lifecycle state machine.

Every reproductive event of a dam goes through :func:`apply_lifecycle_transition`,
which validates the event against the current records and returns the complete
set of side effects as data. Nothing here touches the store: the use cases apply
the returned :class:`LifecycleEffects` inside a single unit of work, so the
transaction boundary and the full effect set live at one call site.

    [no open thread] --SeminationRecorded--> SeminationRecord(is_pregnant=None)
    SeminationRecord(None) --PregnancyChecked(False)--> SeminationRecord(False)
    SeminationRecord(None) --PregnancyChecked(True)--> SeminationRecord(True)
        + PregnancyRecord(IN_PROGRESS), dam PREGNANT
    PregnancyRecord(IN_PROGRESS) --DeliveryRecorded--> DELIVERED + calf, dam ACTIVE
    PregnancyRecord(DELIVERED) --SeparationMarked[today >= delivery + 15d]--> SEPARATED
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Union
from uuid import UUID

from src.application.errors import InvalidState, TooEarly, ValidationError
from src.application.notifications.types import NotificationType
from src.domain.models.cattle import Cattle
from src.domain.models.pregnancy_record import PregnancyRecord, PregnancyStatus
from src.domain.models.semination_record import SeminationRecord
from src.domain.value_objects.cattle_status import CattleStatus, Gender


@dataclass(frozen=True)
class CalfAttributes:
    tag_number: str
    name: str
    gender: str
    breed: str


@dataclass(frozen=True)
class SeminationRecorded:
    cattle: Cattle
    semination_date: date
    actor_user_id: UUID
    notes: str | None = None
    # True when the dam has an unresolved semination or an IN_PROGRESS pregnancy
    has_open_thread: bool = False


@dataclass(frozen=True)
class PregnancyChecked:
    cattle: Cattle
    record: SeminationRecord
    is_pregnant: bool
    checked_at: datetime
    actor_user_id: UUID
    notes: str | None = None


@dataclass(frozen=True)
class DeliveryRecorded:
    dam: Cattle
    pregnancy: PregnancyRecord
    actual_delivery_date: date
    calf: CalfAttributes
    actor_user_id: UUID
    notes: str | None = None
    semination_date: date | None = None
    today: date | None = None


@dataclass(frozen=True)
class SeparationMarked:
    dam: Cattle
    pregnancy: PregnancyRecord
    calf: Cattle | None
    today: date
    actor_user_id: UUID
    notes: str | None = None


LifecycleEvent = Union[SeminationRecorded, PregnancyChecked, DeliveryRecorded, SeparationMarked]


@dataclass(frozen=True)
class CattleStatusUpdate:
    cattle_id: UUID
    status: str


@dataclass(frozen=True)
class RecordUpdate:
    """New state of a record plus the state it must still be in when written."""

    record: SeminationRecord | PregnancyRecord
    expected: Any


@dataclass(frozen=True)
class NotificationToEmit:
    type: str
    organization_id: UUID
    user_id: UUID
    cattle_id: UUID
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class LifecycleEffects:
    cattle_to_add: list[Cattle] = field(default_factory=list)
    records_to_add: list[SeminationRecord | PregnancyRecord] = field(default_factory=list)
    record_updates: list[RecordUpdate] = field(default_factory=list)
    cattle_status_updates: list[CattleStatusUpdate] = field(default_factory=list)
    notifications: list[NotificationToEmit] = field(default_factory=list)


def apply_lifecycle_transition(event: LifecycleEvent) -> LifecycleEffects:
    if isinstance(event, SeminationRecorded):
        return _on_semination_recorded(event)
    if isinstance(event, PregnancyChecked):
        return _on_pregnancy_checked(event)
    if isinstance(event, DeliveryRecorded):
        return _on_delivery_recorded(event)
    if isinstance(event, SeparationMarked):
        return _on_separation_marked(event)
    raise TypeError(f"Unsupported lifecycle event: {type(event).__name__}")


def _recipient(cattle: Cattle, fallback: UUID) -> UUID:
    return cattle.assigned_user_id or fallback


def _on_semination_recorded(event: SeminationRecorded) -> LifecycleEffects:
    cattle = event.cattle
    if cattle.gender == Gender.MALE.value:
        raise ValidationError("Cannot seminate a male animal")
    if cattle.is_deceased:
        raise InvalidState("Cannot seminate a deceased animal")
    if event.has_open_thread:
        raise InvalidState(
            "Cattle already has an open semination or pregnancy",
            details={"cattle_id": str(cattle.id)},
        )

    effects = LifecycleEffects()
    effects.records_to_add.append(
        SeminationRecord.create(
            organization_id=cattle.organization_id,
            cattle_id=cattle.id,
            semination_date=event.semination_date,
            created_by_id=event.actor_user_id,
            notes=event.notes,
        )
    )
    # Repair: PREGNANT without an open pregnancy is an inconsistent leftover
    if cattle.status == CattleStatus.PREGNANT.value:
        effects.cattle_status_updates.append(
            CattleStatusUpdate(cattle.id, CattleStatus.ACTIVE.value)
        )
    return effects


def _on_pregnancy_checked(event: PregnancyChecked) -> LifecycleEffects:
    record = event.record
    if record.is_checked:
        raise InvalidState(
            "Pregnancy check already recorded",
            details={"semination_record_id": str(record.id), "is_pregnant": record.is_pregnant},
        )
    if event.cattle.is_deceased:
        raise InvalidState(
            "Cannot record a pregnancy check for a deceased animal",
            details={"cattle_id": str(event.cattle.id)},
        )

    effects = LifecycleEffects()
    checked = replace(
        record,
        is_pregnant=event.is_pregnant,
        checked_at=event.checked_at,
        notes=event.notes or record.notes,
    )
    effects.record_updates.append(RecordUpdate(checked, expected=None))
    if not event.is_pregnant:
        return effects

    pregnancy = PregnancyRecord.create(
        organization_id=record.organization_id,
        cattle_id=record.cattle_id,
        semination_record_id=record.id,
        semination_date=record.semination_date,
        created_by_id=event.actor_user_id,
    )
    effects.records_to_add.append(pregnancy)
    effects.cattle_status_updates.append(
        CattleStatusUpdate(record.cattle_id, CattleStatus.PREGNANT.value)
    )
    effects.notifications.append(
        NotificationToEmit(
            type=NotificationType.PREGNANCY_CONFIRMED,
            organization_id=record.organization_id,
            user_id=_recipient(event.cattle, record.created_by_id),
            cattle_id=record.cattle_id,
            params={
                "cattle_name": event.cattle.name,
                "cattle_tag": event.cattle.tag_number,
                "expected_delivery_date": pregnancy.expected_delivery_date,
                "pregnancy_record_id": pregnancy.id,
            },
        )
    )
    return effects


def _on_delivery_recorded(event: DeliveryRecorded) -> LifecycleEffects:
    pregnancy = event.pregnancy
    dam = event.dam
    if pregnancy.status != PregnancyStatus.IN_PROGRESS.value:
        raise InvalidState(
            "Pregnancy is not in progress",
            details={"pregnancy_record_id": str(pregnancy.id), "status": pregnancy.status},
        )
    if dam.is_deceased:
        raise InvalidState(
            "Cannot record a delivery for a deceased animal",
            details={"cattle_id": str(dam.id)},
        )
    if event.calf.gender not in {g.value for g in Gender}:
        raise ValidationError("Invalid calf gender")
    delivered_on = event.actual_delivery_date
    if event.semination_date is not None and delivered_on < event.semination_date:
        raise ValidationError(
            "Delivery date cannot be earlier than the semination date",
            details={"semination_date": event.semination_date.isoformat()},
        )
    if event.today is not None and delivered_on > event.today:
        raise ValidationError("Delivery date cannot be in the future")

    calf = Cattle.create(
        organization_id=dam.organization_id,
        tag_number=event.calf.tag_number,
        name=event.calf.name,
        breed=event.calf.breed,
        gender=event.calf.gender,
        date_of_birth=event.actual_delivery_date,
        parent_id=dam.id,
        assigned_user_id=dam.assigned_user_id,
        status=CattleStatus.SEPARATION_PENDING.value,
    )
    delivered = replace(
        pregnancy,
        status=PregnancyStatus.DELIVERED.value,
        actual_delivery_date=event.actual_delivery_date,
        calf_id=calf.id,
        notes=event.notes or pregnancy.notes,
    )

    effects = LifecycleEffects()
    effects.cattle_to_add.append(calf)
    effects.record_updates.append(
        RecordUpdate(delivered, expected=PregnancyStatus.IN_PROGRESS.value)
    )
    effects.cattle_status_updates.append(CattleStatusUpdate(dam.id, CattleStatus.ACTIVE.value))
    effects.notifications.append(
        NotificationToEmit(
            type=NotificationType.CALF_BORN,
            organization_id=dam.organization_id,
            user_id=_recipient(dam, pregnancy.created_by_id),
            cattle_id=dam.id,
            params={
                "cattle_name": dam.name,
                "calf_name": calf.name,
                "calf_tag": calf.tag_number,
                "calf_id": calf.id,
                "delivery_date": event.actual_delivery_date,
            },
        )
    )
    return effects


def _on_separation_marked(event: SeparationMarked) -> LifecycleEffects:
    pregnancy = event.pregnancy
    if pregnancy.status != PregnancyStatus.DELIVERED.value:
        raise InvalidState(
            "Calf has not been delivered or is already separated",
            details={"pregnancy_record_id": str(pregnancy.id), "status": pregnancy.status},
        )
    eligible = pregnancy.separation_eligible_date()
    if eligible is None:
        raise InvalidState("Delivery date missing on delivered pregnancy")
    if event.today < eligible:
        raise TooEarly(
            "Separation can only be marked 15 days after delivery", eligible_date=eligible
        )

    effects = LifecycleEffects()
    effects.record_updates.append(
        RecordUpdate(
            replace(
                pregnancy,
                status=PregnancyStatus.SEPARATED.value,
                notes=event.notes or pregnancy.notes,
            ),
            expected=PregnancyStatus.DELIVERED.value,
        )
    )
    calf = event.calf
    if calf is not None and calf.status == CattleStatus.SEPARATION_PENDING.value:
        effects.cattle_status_updates.append(
            CattleStatusUpdate(calf.id, CattleStatus.ACTIVE.value)
        )
    return effects
