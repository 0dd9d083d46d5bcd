from __future__ import annotations

from dataclasses import dataclass

from src.application.access import Actor
from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.cattle import Cattle
from src.domain.value_objects.cattle_status import CattleStatus


@dataclass(slots=True)
class ListCattleResult:
    items: list[Cattle]
    total: int
    page: int
    limit: int


async def execute(
    uow: UnitOfWork,
    actor: Actor,
    *,
    page: int = 1,
    limit: int = 20,
    status: str | None = None,
    search: str | None = None,
) -> ListCattleResult:
    if limit <= 0 or limit > 100:
        raise ValidationError("limit must be between 1 and 100")
    if page < 1:
        raise ValidationError("page must be greater than 0")
    if status is not None and status not in {s.value for s in CattleStatus}:
        raise ValidationError(f"Unknown cattle status: {status}")

    # Users only ever see the herd assigned to them
    filters = {
        "assigned_user_id": actor.assigned_filter(),
        "status": status,
        "search": search,
    }
    items = await uow.cattle.list(
        actor.organization_id, limit=limit, offset=(page - 1) * limit, **filters
    )
    total = await uow.cattle.count(actor.organization_id, **filters)
    return ListCattleResult(items=items, total=total, page=page, limit=limit)
