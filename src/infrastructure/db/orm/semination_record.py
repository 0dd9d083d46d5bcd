from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class SeminationRecordORM(Base):
    __tablename__ = "semination_records"
    __table_args__ = (
        Index(
            "ix_semination_records_org_cattle_date",
            "organization_id",
            "cattle_id",
            "semination_date",
        ),
        Index(
            "ix_semination_records_pending",
            "check_date",
            postgresql_where="is_pregnant IS NULL",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    organization_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    cattle_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("cattle.id"), nullable=False
    )
    semination_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_pregnant: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    checked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False
    )
    last_reminded_on: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
