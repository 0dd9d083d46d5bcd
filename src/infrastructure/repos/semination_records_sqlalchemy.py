from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.semination_records import (
    SeminationRecordsRepository,
)
from src.domain.models.semination_record import SeminationRecord
from src.infrastructure.db.orm.cattle import CattleORM
from src.infrastructure.db.orm.semination_record import SeminationRecordORM


class SeminationRecordsSQLAlchemyRepository(SeminationRecordsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: SeminationRecordORM) -> SeminationRecord:
        return SeminationRecord(
            id=orm.id,
            organization_id=orm.organization_id,
            cattle_id=orm.cattle_id,
            semination_date=orm.semination_date,
            check_date=orm.check_date,
            created_by_id=orm.created_by_id,
            is_pregnant=orm.is_pregnant,
            checked_at=orm.checked_at,
            notes=orm.notes,
            last_reminded_on=orm.last_reminded_on,
            created_at=orm.created_at,
        )

    async def add(self, record: SeminationRecord) -> SeminationRecord:
        orm = SeminationRecordORM(
            id=record.id,
            organization_id=record.organization_id,
            cattle_id=record.cattle_id,
            semination_date=record.semination_date,
            check_date=record.check_date,
            created_by_id=record.created_by_id,
            is_pregnant=record.is_pregnant,
            checked_at=record.checked_at,
            notes=record.notes,
            last_reminded_on=record.last_reminded_on,
            created_at=record.created_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(
        self, organization_id: UUID, record_id: UUID, *, for_update: bool = False
    ) -> SeminationRecord | None:
        stmt = select(SeminationRecordORM).where(
            SeminationRecordORM.organization_id == organization_id,
            SeminationRecordORM.id == record_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_for_cattle(
        self, organization_id: UUID, cattle_id: UUID
    ) -> list[SeminationRecord]:
        stmt = (
            select(SeminationRecordORM)
            .where(
                SeminationRecordORM.organization_id == organization_id,
                SeminationRecordORM.cattle_id == cattle_id,
            )
            .order_by(
                SeminationRecordORM.semination_date.desc(),
                SeminationRecordORM.created_at.desc(),
            )
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def has_unresolved(self, organization_id: UUID, cattle_id: UUID) -> bool:
        stmt = select(
            exists().where(
                SeminationRecordORM.organization_id == organization_id,
                SeminationRecordORM.cattle_id == cattle_id,
                SeminationRecordORM.is_pregnant.is_(None),
            )
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def record_outcome(self, record: SeminationRecord) -> bool:
        """Write the check result only if no result has been stored yet."""
        stmt = (
            update(SeminationRecordORM)
            .where(SeminationRecordORM.id == record.id)
            .where(SeminationRecordORM.is_pregnant.is_(None))
            .values(
                is_pregnant=record.is_pregnant,
                checked_at=record.checked_at,
                notes=record.notes,
            )
        )
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) == 1

    async def list_pending_checks(
        self,
        organization_id: UUID,
        today: date,
        *,
        assigned_user_id: UUID | None = None,
    ) -> list[SeminationRecord]:
        stmt = (
            select(SeminationRecordORM)
            .join(CattleORM, CattleORM.id == SeminationRecordORM.cattle_id)
            .where(
                SeminationRecordORM.organization_id == organization_id,
                SeminationRecordORM.is_pregnant.is_(None),
                SeminationRecordORM.check_date <= today,
            )
            .order_by(SeminationRecordORM.check_date.asc())
        )
        if assigned_user_id is not None:
            stmt = stmt.where(CattleORM.assigned_user_id == assigned_user_id)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(self, organization_id: UUID) -> int:
        stmt = select(func.count(SeminationRecordORM.id)).where(
            SeminationRecordORM.organization_id == organization_id
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def mark_reminded(self, record_id: UUID, day: date) -> None:
        await self.session.execute(
            update(SeminationRecordORM)
            .where(SeminationRecordORM.id == record_id)
            .values(last_reminded_on=day)
        )
