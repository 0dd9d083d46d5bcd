from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import exists, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.pregnancy_records import (
    PregnancyRecordsRepository,
)
from src.domain.models.pregnancy_record import PregnancyRecord, PregnancyStatus
from src.infrastructure.db.orm.cattle import CattleORM
from src.infrastructure.db.orm.pregnancy_record import PregnancyRecordORM


class PregnancyRecordsSQLAlchemyRepository(PregnancyRecordsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PregnancyRecordORM) -> PregnancyRecord:
        return PregnancyRecord(
            id=orm.id,
            organization_id=orm.organization_id,
            cattle_id=orm.cattle_id,
            semination_record_id=orm.semination_record_id,
            expected_delivery_date=orm.expected_delivery_date,
            created_by_id=orm.created_by_id,
            status=orm.status,
            actual_delivery_date=orm.actual_delivery_date,
            calf_id=orm.calf_id,
            notes=orm.notes,
            last_reminded_on=orm.last_reminded_on,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, record: PregnancyRecord) -> PregnancyRecord:
        orm = PregnancyRecordORM(
            id=record.id,
            organization_id=record.organization_id,
            cattle_id=record.cattle_id,
            semination_record_id=record.semination_record_id,
            expected_delivery_date=record.expected_delivery_date,
            created_by_id=record.created_by_id,
            status=record.status,
            actual_delivery_date=record.actual_delivery_date,
            calf_id=record.calf_id,
            notes=record.notes,
            last_reminded_on=record.last_reminded_on,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Pregnancy already recorded for semination",
                details={"semination_record_id": str(record.semination_record_id)},
            ) from exc
        return self._to_domain(orm)

    async def get(
        self, organization_id: UUID, record_id: UUID, *, for_update: bool = False
    ) -> PregnancyRecord | None:
        stmt = select(PregnancyRecordORM).where(
            PregnancyRecordORM.organization_id == organization_id,
            PregnancyRecordORM.id == record_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_for_cattle(
        self, organization_id: UUID, cattle_id: UUID
    ) -> list[PregnancyRecord]:
        stmt = (
            select(PregnancyRecordORM)
            .where(
                PregnancyRecordORM.organization_id == organization_id,
                PregnancyRecordORM.cattle_id == cattle_id,
            )
            .order_by(PregnancyRecordORM.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def has_in_progress(self, organization_id: UUID, cattle_id: UUID) -> bool:
        stmt = select(
            exists().where(
                PregnancyRecordORM.organization_id == organization_id,
                PregnancyRecordORM.cattle_id == cattle_id,
                PregnancyRecordORM.status == PregnancyStatus.IN_PROGRESS.value,
            )
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def transition(self, record: PregnancyRecord, expected_status: str) -> bool:
        """Compare-and-set on ``status``; False when another writer got there first."""
        stmt = (
            update(PregnancyRecordORM)
            .where(PregnancyRecordORM.id == record.id)
            .where(PregnancyRecordORM.status == expected_status)
            .values(
                status=record.status,
                actual_delivery_date=record.actual_delivery_date,
                calf_id=record.calf_id,
                notes=record.notes,
                updated_at=func.now(),
            )
        )
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) == 1

    async def count_by_status(
        self, organization_id: UUID, *, assigned_user_id: UUID | None = None
    ) -> dict[str, int]:
        stmt = (
            select(PregnancyRecordORM.status, func.count(PregnancyRecordORM.id))
            .where(PregnancyRecordORM.organization_id == organization_id)
            .group_by(PregnancyRecordORM.status)
        )
        if assigned_user_id is not None:
            stmt = stmt.join(CattleORM, CattleORM.id == PregnancyRecordORM.cattle_id).where(
                CattleORM.assigned_user_id == assigned_user_id
            )
        result = await self.session.execute(stmt)
        counts = {status.value: 0 for status in PregnancyStatus}
        for status, count in result.all():
            counts[status] = count
        return counts

    async def count_overdue(
        self, organization_id: UUID, today: date, *, assigned_user_id: UUID | None = None
    ) -> int:
        stmt = select(func.count(PregnancyRecordORM.id)).where(
            PregnancyRecordORM.organization_id == organization_id,
            PregnancyRecordORM.status == PregnancyStatus.IN_PROGRESS.value,
            PregnancyRecordORM.expected_delivery_date <= today,
        )
        if assigned_user_id is not None:
            stmt = stmt.join(CattleORM, CattleORM.id == PregnancyRecordORM.cattle_id).where(
                CattleORM.assigned_user_id == assigned_user_id
            )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def mark_reminded(self, record_id: UUID, day: date) -> None:
        await self.session.execute(
            update(PregnancyRecordORM)
            .where(PregnancyRecordORM.id == record_id)
            .values(last_reminded_on=day)
        )
