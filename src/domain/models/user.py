from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.role import Role


@dataclass(slots=True)
class User:
    id: UUID
    organization_id: UUID
    username: str
    email: str
    hashed_password: str
    role: Role = Role.USER
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        organization_id: UUID,
        username: str,
        email: str,
        hashed_password: str,
        *,
        role: Role = Role.USER,
        is_active: bool = True,
    ) -> User:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            organization_id=organization_id,
            username=username,
            email=email.lower(),
            hashed_password=hashed_password,
            role=role,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
