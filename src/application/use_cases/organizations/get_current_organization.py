from __future__ import annotations

from src.application.access import Actor
from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.organization import Organization


async def execute(uow: UnitOfWork, actor: Actor) -> Organization:
    organization = await uow.organizations.get(actor.organization_id)
    if not organization:
        raise NotFound("Organization not found")
    return organization
