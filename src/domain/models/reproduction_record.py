from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


class ReproductionEventType(str, Enum):
    HEAT = "Heat"
    MATING = "Mating"
    ULTRASOUND = "Ultrasound"
    BIRTH = "Birth"
    ABORTION = "Abortion"
    WEANING = "Weaning"
    LACTATION = "Lactation"


class HeatIntensity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class UltrasoundResult(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"


@dataclass(slots=True, frozen=True)
class ReproductionRecordDraft:
    """A proposed event, before it has been accepted and given an id."""

    date: date
    type: ReproductionEventType
    mate_id: UUID | None = None
    notes: str | None = None
    heat_intensity: HeatIntensity | None = None
    heat_duration_hours: int | None = None
    offspring_count: int | None = None
    outcome: str | None = None
    ultrasound_result: UltrasoundResult | None = None


@dataclass(slots=True, frozen=True)
class ReproductionRecord:
    id: UUID
    date: date
    type: ReproductionEventType
    mate_id: UUID | None = None
    notes: str | None = None

    # Heat fields
    heat_intensity: HeatIntensity | None = None
    heat_duration_hours: int | None = None

    # Birth fields
    offspring_count: int | None = None
    outcome: str | None = None

    # Ultrasound fields
    ultrasound_result: UltrasoundResult | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_draft(cls, draft: ReproductionRecordDraft) -> ReproductionRecord:
        """Build a record keeping only the fields that belong to the draft's type."""
        is_heat = draft.type == ReproductionEventType.HEAT
        is_birth = draft.type == ReproductionEventType.BIRTH
        is_ultrasound = draft.type == ReproductionEventType.ULTRASOUND
        notes = draft.notes.strip() if draft.notes and draft.notes.strip() else None
        outcome = None
        if is_birth and draft.outcome and draft.outcome.strip():
            outcome = draft.outcome.strip()
        return cls(
            id=uuid4(),
            date=draft.date,
            type=draft.type,
            mate_id=draft.mate_id,
            notes=notes,
            heat_intensity=draft.heat_intensity if is_heat else None,
            heat_duration_hours=draft.heat_duration_hours if is_heat else None,
            offspring_count=(draft.offspring_count or 1) if is_birth else None,
            outcome=outcome,
            ultrasound_result=draft.ultrasound_result if is_ultrasound else None,
        )

    @classmethod
    def birth(
        cls,
        birth_date: date,
        *,
        offspring_count: int = 1,
        notes: str | None = None,
        sire_id: UUID | None = None,
    ) -> ReproductionRecord:
        return cls(
            id=uuid4(),
            date=birth_date,
            type=ReproductionEventType.BIRTH,
            mate_id=sire_id,
            notes=notes,
            offspring_count=offspring_count,
        )

    def is_dyadic(self) -> bool:
        return self.type == ReproductionEventType.MATING and self.mate_id is not None

    def mirrored_for(self, subject_id: UUID) -> ReproductionRecord:
        """Counterpart of a mating, to be stored on the partner's history."""
        return ReproductionRecord(
            id=uuid4(),
            date=self.date,
            type=ReproductionEventType.MATING,
            mate_id=subject_id,
            notes=self.notes,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": str(self.id),
            "date": self.date.isoformat(),
            "type": self.type.value,
            "created_at": self.created_at.isoformat(),
        }
        # Optional fields are omitted rather than stored as nulls
        if self.mate_id is not None:
            data["mate_id"] = str(self.mate_id)
        if self.notes is not None:
            data["notes"] = self.notes
        if self.heat_intensity is not None:
            data["heat_intensity"] = self.heat_intensity.value
        if self.heat_duration_hours is not None:
            data["heat_duration_hours"] = self.heat_duration_hours
        if self.offspring_count is not None:
            data["offspring_count"] = self.offspring_count
        if self.outcome is not None:
            data["outcome"] = self.outcome
        if self.ultrasound_result is not None:
            data["ultrasound_result"] = self.ultrasound_result.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReproductionRecord:
        created_at = data.get("created_at")
        return cls(
            id=UUID(data["id"]),
            date=date.fromisoformat(data["date"]),
            type=ReproductionEventType(data["type"]),
            mate_id=UUID(data["mate_id"]) if data.get("mate_id") else None,
            notes=data.get("notes"),
            heat_intensity=HeatIntensity(data["heat_intensity"])
            if data.get("heat_intensity")
            else None,
            heat_duration_hours=data.get("heat_duration_hours"),
            offspring_count=data.get("offspring_count"),
            outcome=data.get("outcome"),
            ultrasound_result=UltrasoundResult(data["ultrasound_result"])
            if data.get("ultrasound_result")
            else None,
            created_at=datetime.fromisoformat(created_at)
            if created_at
            else datetime.now(timezone.utc),
        )
