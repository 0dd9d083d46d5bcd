from __future__ import annotations

from enum import Enum


class CattleStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PREGNANT = "PREGNANT"
    # Calf still depending on its dam; cleared when separation is marked
    SEPARATION_PENDING = "SEPARATION_PENDING"
    DECEASED = "DECEASED"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
