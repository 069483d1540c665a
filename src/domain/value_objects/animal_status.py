from __future__ import annotations

from enum import Enum


class AnimalStatus(str, Enum):
    ACTIVE = "Active"
    SOLD = "Sold"
    DECEASED = "Deceased"
    EXTERNAL = "External"

    def accepts_new_events(self) -> bool:
        return self not in {AnimalStatus.SOLD, AnimalStatus.DECEASED}
