from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, InfrastructureError
from src.application.interfaces.repositories.cattle import CattleRepository
from src.domain.models.cattle import Cattle
from src.infrastructure.db.orm.cattle import CattleORM


class CattleSQLAlchemyRepository(CattleRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: CattleORM) -> Cattle:
        return Cattle(
            id=orm.id,
            organization_id=orm.organization_id,
            tag_number=orm.tag_number,
            name=orm.name,
            breed=orm.breed,
            gender=orm.gender,
            date_of_birth=orm.date_of_birth,
            status=orm.status,
            parent_id=orm.parent_id,
            assigned_user_id=orm.assigned_user_id,
            photo_url=orm.photo_url,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, cattle: Cattle) -> Cattle:
        orm = CattleORM(
            id=cattle.id,
            organization_id=cattle.organization_id,
            tag_number=cattle.tag_number,
            name=cattle.name,
            breed=cattle.breed,
            gender=cattle.gender,
            date_of_birth=cattle.date_of_birth,
            status=cattle.status,
            parent_id=cattle.parent_id,
            assigned_user_id=cattle.assigned_user_id,
            photo_url=cattle.photo_url,
            created_at=cattle.created_at,
            updated_at=cattle.updated_at,
            version=cattle.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Tag number already exists in organization",
                details={"tag_number": cattle.tag_number},
            ) from exc
        return self._to_domain(orm)

    async def get(
        self, organization_id: UUID, cattle_id: UUID, *, for_update: bool = False
    ) -> Cattle | None:
        stmt = (
            select(CattleORM)
            .where(CattleORM.organization_id == organization_id)
            .where(CattleORM.id == cattle_id)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_tag(self, organization_id: UUID, tag_number: str) -> Cattle | None:
        stmt = select(CattleORM).where(
            CattleORM.organization_id == organization_id,
            CattleORM.tag_number == tag_number,
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    def _filtered(
        self,
        stmt,
        organization_id: UUID,
        *,
        assigned_user_id: UUID | None,
        status: str | None,
        search: str | None,
    ):
        stmt = stmt.where(CattleORM.organization_id == organization_id)
        if assigned_user_id is not None:
            stmt = stmt.where(CattleORM.assigned_user_id == assigned_user_id)
        if status:
            stmt = stmt.where(CattleORM.status == status)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(CattleORM.name).like(pattern),
                    func.lower(CattleORM.tag_number).like(pattern),
                )
            )
        return stmt

    async def list(
        self,
        organization_id: UUID,
        *,
        assigned_user_id: UUID | None = None,
        status: str | None = None,
        search: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Cattle]:
        stmt = self._filtered(
            select(CattleORM),
            organization_id,
            assigned_user_id=assigned_user_id,
            status=status,
            search=search,
        )
        stmt = stmt.order_by(CattleORM.created_at.desc(), CattleORM.id).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(
        self,
        organization_id: UUID,
        *,
        assigned_user_id: UUID | None = None,
        status: str | None = None,
        search: str | None = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count(CattleORM.id)),
            organization_id,
            assigned_user_id=assigned_user_id,
            status=status,
            search=search,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def update(
        self,
        organization_id: UUID,
        cattle_id: UUID,
        data: dict,
        expected_version: int,
    ) -> Cattle | None:
        values = {**data, "version": expected_version + 1}
        stmt = (
            update(CattleORM)
            .where(CattleORM.organization_id == organization_id, CattleORM.id == cattle_id)
            .where(CattleORM.version == expected_version)
            .values(**values)
            .returning(CattleORM)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update cattle due to constraint violation") from exc
        orm = result.scalar_one_or_none()
        if not orm:
            return None
        return self._to_domain(orm)

    async def update_status(self, cattle_id: UUID, status: str) -> None:
        stmt = (
            update(CattleORM)
            .where(CattleORM.id == cattle_id)
            .values(status=status, version=CattleORM.version + 1, updated_at=func.now())
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise InfrastructureError("Failed to update cattle status")

    async def count_by_status(self, organization_id: UUID) -> dict[str, int]:
        stmt = (
            select(CattleORM.status, func.count(CattleORM.id))
            .where(CattleORM.organization_id == organization_id)
            .group_by(CattleORM.status)
        )
        result = await self.session.execute(stmt)
        return {status: count for status, count in result.all()}
