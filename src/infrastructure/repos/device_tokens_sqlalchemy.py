from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.db.orm.device_token import DeviceTokenORM


class DeviceTokensSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def register(
        self,
        *,
        organization_id: UUID,
        user_id: UUID,
        platform: str,
        token: str,
        app_version: str | None = None,
    ) -> DeviceTokenORM:
        """Attach ``token`` to the user, re-enabling it if it was known already.

        A token moves with the device, so an existing row is reassigned to the
        caller instead of raising on the unique constraint.
        """
        stmt = select(DeviceTokenORM).where(DeviceTokenORM.token == token)
        res = await self.session.execute(stmt)
        existing: DeviceTokenORM | None = res.scalar_one_or_none()
        now = datetime.now(timezone.utc)
        if existing:
            existing.organization_id = organization_id
            existing.user_id = user_id
            existing.platform = platform
            existing.app_version = app_version
            existing.disabled = False
            existing.last_active_at = now
            await self.session.flush()
            return existing
        obj = DeviceTokenORM(
            id=uuid4(),
            organization_id=organization_id,
            user_id=user_id,
            platform=platform,
            token=token,
            app_version=app_version,
            disabled=False,
            last_active_at=now,
        )
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def remove(self, *, user_id: UUID, token: str) -> int:
        res = await self.session.execute(
            delete(DeviceTokenORM).where(
                DeviceTokenORM.user_id == user_id, DeviceTokenORM.token == token
            )
        )
        return res.rowcount or 0

    async def active_tokens_for_user(self, user_id: UUID) -> list[str]:
        stmt = select(DeviceTokenORM.token).where(
            DeviceTokenORM.user_id == user_id,
            DeviceTokenORM.disabled == False,  # noqa: E712
        )
        res = await self.session.execute(stmt)
        return list(res.scalars())

    async def disable_tokens(self, tokens: list[str]) -> int:
        """Mark tokens rejected by FCM so they are skipped on later sends."""
        if not tokens:
            return 0
        stmt = (
            update(DeviceTokenORM)
            .where(DeviceTokenORM.token.in_(tokens))
            .values(disabled=True, last_active_at=datetime.now(timezone.utc))
        )
        res = await self.session.execute(stmt)
        return res.rowcount or 0
