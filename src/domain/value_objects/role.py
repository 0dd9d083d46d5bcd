from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"

    def can_create(self) -> bool:
        return self is Role.ADMIN

    def can_delete(self) -> bool:
        return self is Role.ADMIN

    def can_manage_users(self) -> bool:
        return self is Role.ADMIN

    def sees_all_cattle(self) -> bool:
        return self is Role.ADMIN
