from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from src.application.access import Actor
from src.application.use_cases.breeding import (
    list_pregnancy_records,
    mark_separation,
    pregnancy_stats,
    record_delivery,
)
from src.interfaces.http.deps import get_actor, get_uow, schedule_event_dispatch
from src.interfaces.http.schemas.breeding import (
    DeliveryRequest,
    DeliveryResponse,
    PregnancyResponse,
    PregnancyStatsResponse,
    SeparationRequest,
)
from src.interfaces.http.schemas.cattle import CattleResponse

router = APIRouter(prefix="/pregnancies", tags=["breeding"])


@router.get("/stats", response_model=PregnancyStatsResponse)
async def pregnancy_stats_endpoint(
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
):
    return await pregnancy_stats.execute(uow, actor)


@router.get("/cattle/{cattle_id}", response_model=list[PregnancyResponse])
async def list_pregnancy_records_endpoint(
    cattle_id: UUID,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
):
    return await list_pregnancy_records.execute(uow, actor, cattle_id)


@router.put("/{record_id}/delivery", response_model=DeliveryResponse)
async def record_delivery_endpoint(
    record_id: UUID,
    payload: DeliveryRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
) -> DeliveryResponse:
    result = await record_delivery.execute(
        uow,
        actor,
        record_delivery.RecordDeliveryInput(
            pregnancy_record_id=record_id,
            actual_delivery_date=payload.actual_delivery_date,
            calf_tag_number=payload.calf_tag_number,
            calf_name=payload.calf_name,
            calf_gender=payload.calf_gender,
            calf_breed=payload.calf_breed,
            notes=payload.notes,
        ),
    )
    schedule_event_dispatch(request, background_tasks, uow)
    return DeliveryResponse(
        pregnancy=PregnancyResponse.model_validate(result.pregnancy_record),
        calf=CattleResponse.model_validate(result.calf),
    )


@router.put("/{record_id}/separation", response_model=PregnancyResponse)
async def mark_separation_endpoint(
    record_id: UUID,
    payload: SeparationRequest,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
):
    return await mark_separation.execute(
        uow,
        actor,
        mark_separation.MarkSeparationInput(pregnancy_record_id=record_id, notes=payload.notes),
    )
