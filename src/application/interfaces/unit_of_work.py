from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.cattle import CattleRepository
from src.application.interfaces.repositories.organizations import OrganizationRepository
from src.application.interfaces.repositories.pregnancy_records import (
    PregnancyRecordsRepository,
)
from src.application.interfaces.repositories.semination_records import (
    SeminationRecordsRepository,
)
from src.application.interfaces.repositories.users import UserRepository


class UnitOfWork(Protocol):
    cattle: CattleRepository
    semination_records: SeminationRecordsRepository
    pregnancy_records: PregnancyRecordsRepository
    users: UserRepository
    organizations: OrganizationRepository
    # Domain events collected during the transaction
    events: list

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    # Record a domain event during the transaction
    def add_event(self, event: object) -> None: ...

    # Drain collected events (used for post-commit dispatch)
    def drain_events(self) -> list: ...
