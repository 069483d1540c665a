from __future__ import annotations

from enum import Enum

from src.domain.value_objects.gender import Gender


class ParentRole(str, Enum):
    SIRE = "sire"  # Father
    DAM = "dam"  # Mother

    @property
    def field_name(self) -> str:
        return "sire_id" if self is ParentRole.SIRE else "dam_id"

    @property
    def expected_gender(self) -> Gender:
        return Gender.MALE if self is ParentRole.SIRE else Gender.FEMALE
