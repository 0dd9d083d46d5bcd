from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.access import Actor, ensure_admin
from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.cattle import Cattle
from src.domain.value_objects.cattle_status import Gender


@dataclass(slots=True)
class CreateCattleInput:
    tag_number: str
    name: str
    breed: str
    gender: str
    date_of_birth: date
    parent_id: UUID | None = None
    assigned_user_id: UUID | None = None
    photo_url: str | None = None


async def execute(uow: UnitOfWork, actor: Actor, payload: CreateCattleInput) -> Cattle:
    ensure_admin(actor, "Only admins can register cattle")
    if payload.gender not in {g.value for g in Gender}:
        raise ValidationError("gender must be MALE or FEMALE")

    if await uow.cattle.get_by_tag(actor.organization_id, payload.tag_number):
        raise ConflictError(
            "Tag number already exists in organization",
            details={"tag_number": payload.tag_number},
        )
    if payload.parent_id and not await uow.cattle.get(actor.organization_id, payload.parent_id):
        raise NotFound(f"Parent cattle {payload.parent_id} not found")
    if payload.assigned_user_id and not await uow.users.get_in_organization(
        actor.organization_id, payload.assigned_user_id
    ):
        raise ValidationError("Assigned user does not belong to the organization")

    cattle = Cattle.create(
        organization_id=actor.organization_id,
        tag_number=payload.tag_number,
        name=payload.name,
        breed=payload.breed,
        gender=payload.gender,
        date_of_birth=payload.date_of_birth,
        parent_id=payload.parent_id,
        assigned_user_id=payload.assigned_user_id,
        photo_url=payload.photo_url,
    )
    created = await uow.cattle.add(cattle)
    await uow.commit()
    return created
