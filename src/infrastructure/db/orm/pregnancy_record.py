from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class PregnancyRecordORM(Base):
    __tablename__ = "pregnancy_records"
    __table_args__ = (
        Index("ix_pregnancy_records_org_cattle", "organization_id", "cattle_id"),
        Index("ix_pregnancy_records_status_expected", "status", "expected_delivery_date"),
        Index("ix_pregnancy_records_status_actual", "status", "actual_delivery_date"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    organization_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    cattle_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("cattle.id"), nullable=False
    )
    # One pregnancy per positive check
    semination_record_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("semination_records.id"), nullable=False, unique=True
    )
    expected_delivery_date: Mapped[date] = mapped_column(Date, nullable=False)
    actual_delivery_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    calf_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("cattle.id"), nullable=True
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="IN_PROGRESS")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False
    )
    last_reminded_on: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
