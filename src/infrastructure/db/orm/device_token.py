from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class DeviceTokenORM(Base):
    """FCM registration token of one of a user's phones."""

    __tablename__ = "device_tokens"
    __table_args__ = (
        # A token identifies a device, whoever is logged in on it
        Index("uq_device_tokens_token", "token", unique=True),
        Index("ix_device_tokens_user", "user_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    organization_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    platform: Mapped[str] = mapped_column(String(20), nullable=False)  # ios | android | web
    token: Mapped[str] = mapped_column(String(512), nullable=False)
    app_version: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # Set when FCM reports the token as unregistered
    disabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    last_active_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
