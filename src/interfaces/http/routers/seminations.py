from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status

from src.application.access import Actor
from src.application.use_cases.breeding import (
    check_pregnancy,
    list_pending_checks,
    list_semination_history,
    record_semination,
)
from src.interfaces.http.deps import get_actor, get_uow, schedule_event_dispatch
from src.interfaces.http.schemas.breeding import (
    PregnancyCheckRequest,
    PregnancyCheckResponse,
    PregnancyResponse,
    SeminationCreate,
    SeminationHistoryItem,
    SeminationResponse,
)

router = APIRouter(prefix="/seminations", tags=["breeding"])


@router.post("", response_model=SeminationResponse, status_code=status.HTTP_201_CREATED)
async def record_semination_endpoint(
    payload: SeminationCreate,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
):
    return await record_semination.execute(
        uow,
        actor,
        record_semination.RecordSeminationInput(
            cattle_id=payload.cattle_id,
            semination_date=payload.semination_date,
            notes=payload.notes,
        ),
    )


@router.get("/pending-checks", response_model=list[SeminationResponse])
async def list_pending_checks_endpoint(
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
):
    return await list_pending_checks.execute(uow, actor)


@router.put("/{record_id}/check", response_model=PregnancyCheckResponse)
async def check_pregnancy_endpoint(
    record_id: UUID,
    payload: PregnancyCheckRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
) -> PregnancyCheckResponse:
    result = await check_pregnancy.execute(
        uow,
        actor,
        check_pregnancy.CheckPregnancyInput(
            semination_record_id=record_id,
            is_pregnant=payload.is_pregnant,
            notes=payload.notes,
        ),
    )
    schedule_event_dispatch(request, background_tasks, uow)
    return PregnancyCheckResponse(
        semination=SeminationResponse.model_validate(result.semination_record),
        pregnancy=(
            PregnancyResponse.model_validate(result.pregnancy_record)
            if result.pregnancy_record
            else None
        ),
    )


@router.get("/cattle/{cattle_id}", response_model=list[SeminationHistoryItem])
async def list_semination_history_endpoint(
    cattle_id: UUID,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
) -> list[SeminationHistoryItem]:
    entries = await list_semination_history.execute(uow, actor, cattle_id)
    items = []
    for entry in entries:
        item = SeminationHistoryItem.model_validate(entry.semination)
        if entry.pregnancy is not None:
            item.pregnancy = PregnancyResponse.model_validate(entry.pregnancy)
        items.append(item)
    return items
