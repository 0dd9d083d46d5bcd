from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Organization:
    id: UUID
    name: str
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, name: str, description: str | None = None) -> Organization:
        return cls(
            id=uuid4(),
            name=name.strip(),
            description=description,
            created_at=datetime.now(timezone.utc),
        )
