from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.access import Actor
from src.application.use_cases.organizations import get_current_organization, organization_stats
from src.interfaces.http.deps import get_actor, get_uow
from src.interfaces.http.schemas.organizations import (
    OrganizationResponse,
    OrganizationStatsResponse,
)

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.get("/current", response_model=OrganizationResponse)
async def read_current_organization(actor: Actor = Depends(get_actor), uow=Depends(get_uow)):
    return await get_current_organization.execute(uow, actor)


@router.get("/current/stats", response_model=OrganizationStatsResponse)
async def read_organization_stats(actor: Actor = Depends(get_actor), uow=Depends(get_uow)):
    return await organization_stats.execute(uow, actor)
