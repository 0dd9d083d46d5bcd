from __future__ import annotations

import math
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.application.access import Actor
from src.application.use_cases.cattle import (
    create_cattle,
    get_cattle,
    list_cattle,
    mark_deceased,
    update_cattle,
)
from src.interfaces.http.deps import get_actor, get_uow
from src.interfaces.http.schemas.auth import PaginationInfo
from src.interfaces.http.schemas.cattle import (
    CattleCreate,
    CattleListResponse,
    CattleResponse,
    CattleUpdate,
)

router = APIRouter(prefix="/cattle", tags=["cattle"])


@router.post("", response_model=CattleResponse, status_code=status.HTTP_201_CREATED)
async def create_cattle_endpoint(
    payload: CattleCreate,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
):
    return await create_cattle.execute(
        uow, actor, create_cattle.CreateCattleInput(**payload.model_dump())
    )


@router.get("", response_model=CattleListResponse)
async def list_cattle_endpoint(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: str | None = Query(None, alias="status"),
    search: str | None = None,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
) -> CattleListResponse:
    result = await list_cattle.execute(
        uow, actor, page=page, limit=limit, status=status_filter, search=search
    )
    return CattleListResponse(
        items=[CattleResponse.model_validate(c) for c in result.items],
        pagination=PaginationInfo(
            page=result.page,
            limit=result.limit,
            total=result.total,
            pages=math.ceil(result.total / result.limit) if result.total else 0,
        ),
    )


@router.get("/{cattle_id}", response_model=CattleResponse)
async def get_cattle_endpoint(
    cattle_id: UUID,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
):
    return await get_cattle.execute(uow, actor, cattle_id)


@router.put("/{cattle_id}", response_model=CattleResponse)
async def update_cattle_endpoint(
    cattle_id: UUID,
    payload: CattleUpdate,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
):
    return await update_cattle.execute(
        uow, actor, cattle_id, update_cattle.UpdateCattleInput(**payload.model_dump())
    )


@router.delete("/{cattle_id}", response_model=CattleResponse)
async def delete_cattle_endpoint(
    cattle_id: UUID,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
):
    return await mark_deceased.execute(uow, actor, cattle_id)
