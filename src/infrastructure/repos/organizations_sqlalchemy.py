from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.organizations import OrganizationRepository
from src.domain.models.organization import Organization
from src.infrastructure.db.orm.organization import OrganizationORM


class OrganizationsSQLAlchemyRepository(OrganizationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: OrganizationORM) -> Organization:
        return Organization(
            id=orm.id,
            name=orm.name,
            description=orm.description,
            created_at=orm.created_at,
        )

    async def add(self, organization: Organization) -> Organization:
        orm = OrganizationORM(
            id=organization.id,
            name=organization.name,
            description=organization.description,
            created_at=organization.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Organization name already exists") from exc
        return self._to_domain(orm)

    async def get(self, organization_id: UUID) -> Organization | None:
        result = await self.session.execute(
            select(OrganizationORM).where(OrganizationORM.id == organization_id)
        )
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_name(self, name: str) -> Organization | None:
        result = await self.session.execute(
            select(OrganizationORM).where(OrganizationORM.name == name.strip())
        )
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None
