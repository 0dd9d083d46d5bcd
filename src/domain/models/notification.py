from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Notification:
    id: UUID
    organization_id: UUID
    user_id: UUID
    type: str
    title: str
    message: str
    cattle_id: UUID | None = None
    data: dict | None = None
    is_read: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    read_at: datetime | None = None

    @classmethod
    def create(
        cls,
        organization_id: UUID,
        user_id: UUID,
        type: str,
        title: str,
        message: str,
        cattle_id: UUID | None = None,
        data: dict | None = None,
    ) -> Notification:
        return cls(
            id=uuid4(),
            organization_id=organization_id,
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            cattle_id=cattle_id,
            data=data,
            is_read=False,
            created_at=datetime.now(timezone.utc),
            read_at=None,
        )

    def mark_as_read(self) -> None:
        if not self.is_read:
            self.is_read = True
            self.read_at = datetime.now(timezone.utc)
