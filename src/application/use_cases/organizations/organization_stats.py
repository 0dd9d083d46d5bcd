from __future__ import annotations

from dataclasses import dataclass, field

from src.application.access import Actor
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.cattle_status import CattleStatus


@dataclass(slots=True)
class OrganizationStats:
    total_cattle: int
    cattle_by_status: dict[str, int] = field(default_factory=dict)
    total_users: int = 0
    total_seminations: int = 0


async def execute(uow: UnitOfWork, actor: Actor) -> OrganizationStats:
    by_status = {status.value: 0 for status in CattleStatus}
    by_status.update(await uow.cattle.count_by_status(actor.organization_id))
    _, total_users = await uow.users.list_by_organization(actor.organization_id, page=1, limit=1)
    return OrganizationStats(
        total_cattle=sum(by_status.values()),
        cattle_by_status=by_status,
        total_users=total_users,
        total_seminations=await uow.semination_records.count(actor.organization_id),
    )
