from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.cattle_status import CattleStatus


@dataclass(slots=True)
class Cattle:
    id: UUID
    organization_id: UUID
    tag_number: str
    name: str
    breed: str
    gender: str
    date_of_birth: date
    status: str = CattleStatus.ACTIVE.value

    # Genealogy: weak reference to the dam, never cascaded
    parent_id: UUID | None = None
    assigned_user_id: UUID | None = None
    photo_url: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        organization_id: UUID,
        tag_number: str,
        name: str,
        breed: str,
        gender: str,
        date_of_birth: date,
        parent_id: UUID | None = None,
        assigned_user_id: UUID | None = None,
        photo_url: str | None = None,
        status: str = CattleStatus.ACTIVE.value,
    ) -> Cattle:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            organization_id=organization_id,
            tag_number=tag_number,
            name=name,
            breed=breed,
            gender=gender,
            date_of_birth=date_of_birth,
            status=status,
            parent_id=parent_id,
            assigned_user_id=assigned_user_id,
            photo_url=photo_url,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_deceased(self) -> bool:
        return self.status == CattleStatus.DECEASED.value

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
