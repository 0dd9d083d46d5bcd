from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork
from src.infrastructure.repos.cattle_sqlalchemy import CattleSQLAlchemyRepository
from src.infrastructure.repos.organizations_sqlalchemy import OrganizationsSQLAlchemyRepository
from src.infrastructure.repos.pregnancy_records_sqlalchemy import (
    PregnancyRecordsSQLAlchemyRepository,
)
from src.infrastructure.repos.semination_records_sqlalchemy import (
    SeminationRecordsSQLAlchemyRepository,
)
from src.infrastructure.repos.users_sqlalchemy import UsersSQLAlchemyRepository


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.events: list = []
        self._reset_repositories()

    def _reset_repositories(self) -> None:
        self.cattle = None
        self.semination_records = None
        self.pregnancy_records = None
        self.users = None
        self.organizations = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        self.events = []
        self.cattle = CattleSQLAlchemyRepository(self.session)
        self.semination_records = SeminationRecordsSQLAlchemyRepository(self.session)
        self.pregnancy_records = PregnancyRecordsSQLAlchemyRepository(self.session)
        self.users = UsersSQLAlchemyRepository(self.session)
        self.organizations = OrganizationsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
                self.events = []
        finally:
            await self.session.close()
            self.session = None
            self._reset_repositories()

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
        self.events = []

    def add_event(self, event: object) -> None:
        self.events.append(event)

    def drain_events(self) -> list:
        events, self.events = self.events, []
        return events
