from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.access import Actor, ensure_cattle_access
from src.application.errors import ConflictError, PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.cattle import Cattle


@dataclass(slots=True)
class UpdateCattleInput:
    version: int
    name: str | None = None
    breed: str | None = None
    date_of_birth: date | None = None
    photo_url: str | None = None
    assigned_user_id: UUID | None = None


async def execute(
    uow: UnitOfWork,
    actor: Actor,
    cattle_id: UUID,
    payload: UpdateCattleInput,
) -> Cattle:
    """Update descriptive fields. Status is owned by the breeding lifecycle."""
    if payload.version < 1:
        raise ValidationError("Invalid version value")
    existing = await uow.cattle.get(actor.organization_id, cattle_id)
    existing = ensure_cattle_access(actor, existing, cattle_id=cattle_id)

    data: dict = {}
    for field_name in ("name", "breed", "date_of_birth", "photo_url"):
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    if payload.assigned_user_id is not None:
        if not actor.is_admin:
            raise PermissionDenied("Only admins can reassign cattle")
        if not await uow.users.get_in_organization(
            actor.organization_id, payload.assigned_user_id
        ):
            raise ValidationError("Assigned user does not belong to the organization")
        data["assigned_user_id"] = payload.assigned_user_id
    if not data:
        return existing

    updated = await uow.cattle.update(
        actor.organization_id,
        cattle_id,
        data=data,
        expected_version=payload.version,
    )
    if not updated:
        raise ConflictError("Version mismatch while updating cattle")
    await uow.commit()
    return updated
