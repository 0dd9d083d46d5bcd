from __future__ import annotations

from uuid import UUID

from src.application.access import Actor, ensure_admin, ensure_cattle_access
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.cattle import Cattle
from src.domain.value_objects.cattle_status import CattleStatus


async def execute(uow: UnitOfWork, actor: Actor, cattle_id: UUID) -> Cattle:
    """Tombstone a cattle record; rows are never removed because calves point at their dam."""
    ensure_admin(actor, "Only admins can delete cattle")
    cattle = await uow.cattle.get(actor.organization_id, cattle_id, for_update=True)
    cattle = ensure_cattle_access(actor, cattle, cattle_id=cattle_id)
    if cattle.is_deceased:
        return cattle
    await uow.cattle.update_status(cattle.id, CattleStatus.DECEASED.value)
    await uow.commit()
    cattle.status = CattleStatus.DECEASED.value
    cattle.bump_version()
    return cattle
