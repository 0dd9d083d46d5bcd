from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.application.errors import NotFound
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.repos.notifications_sqlalchemy import NotificationsSQLAlchemyRepository
from src.interfaces.http.deps import get_auth_context, get_uow
from src.interfaces.http.schemas.notifications import (
    MarkAsReadResponse,
    NotificationListResponse,
    NotificationSchema,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    unread_only: bool = False,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> NotificationListResponse:
    """Get user's notifications, newest first."""
    repo = NotificationsSQLAlchemyRepository(uow.session)
    notifications = await repo.list_by_user(
        organization_id=context.organization_id,
        user_id=context.user_id,
        unread_only=unread_only,
        limit=limit,
        offset=offset,
    )
    unread_count = await repo.count_unread(
        organization_id=context.organization_id,
        user_id=context.user_id,
    )
    return NotificationListResponse(
        notifications=[NotificationSchema.model_validate(n) for n in notifications],
        total=len(notifications),
        unread_count=unread_count,
    )


@router.put("/{notification_id}/read", response_model=MarkAsReadResponse)
async def mark_notification_as_read(
    notification_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> MarkAsReadResponse:
    repo = NotificationsSQLAlchemyRepository(uow.session)
    notification = await repo.get(context.organization_id, notification_id)
    if notification is None or notification.user_id != context.user_id:
        raise NotFound("Notification not found")
    marked_count = await repo.mark_as_read(context.user_id, notification_id)
    await uow.commit()
    return MarkAsReadResponse(marked_count=marked_count)
