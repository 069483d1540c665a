from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any
from uuid import UUID, uuid4


@dataclass(slots=True, frozen=True)
class HealthRecord:
    id: UUID
    date: date
    type: str  # Vaccination, Treatment, Checkup...
    description: str | None = None
    veterinarian: str | None = None
    notes: str | None = None

    @classmethod
    def create(
        cls,
        record_date: date,
        type: str,
        description: str | None = None,
        veterinarian: str | None = None,
        notes: str | None = None,
    ) -> HealthRecord:
        return cls(
            id=uuid4(),
            date=record_date,
            type=type,
            description=description,
            veterinarian=veterinarian,
            notes=notes,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "date": self.date.isoformat(),
            "type": self.type,
            "description": self.description,
            "veterinarian": self.veterinarian,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HealthRecord:
        return cls(
            id=UUID(data["id"]),
            date=date.fromisoformat(data["date"]),
            type=data["type"],
            description=data.get("description"),
            veterinarian=data.get("veterinarian"),
            notes=data.get("notes"),
        )
