from __future__ import annotations

from datetime import date
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models.reproduction_record import (
    HeatIntensity,
    ReproductionEventType,
    ReproductionRecordDraft,
    UltrasoundResult,
)
from src.domain.services.reproduction_validator import DecisionOutcome
from src.interfaces.http.schemas.animals import ReproductionRecordResponse


class ReproductionEventCreate(BaseModel):
    """Schema for proposing a reproduction event.

    Type-specific fields are kept only for their own type:
    - Heat: heat_intensity, heat_duration_hours
    - Mating: mate_id (mirrored onto the partner)
    - Birth: offspring_count, outcome, mate_id (sire)
    - Ultrasound: ultrasound_result
    """

    date: date
    type: ReproductionEventType
    mate_id: UUID | None = None
    notes: str | None = Field(None, max_length=2000)
    heat_intensity: HeatIntensity | None = None
    heat_duration_hours: int | None = Field(None, ge=1)
    offspring_count: int | None = Field(None, ge=1)
    outcome: str | None = Field(None, max_length=255)
    ultrasound_result: UltrasoundResult | None = None

    def to_draft(self) -> ReproductionRecordDraft:
        return ReproductionRecordDraft(
            date=self.date,
            type=self.type,
            mate_id=self.mate_id,
            notes=self.notes,
            heat_intensity=self.heat_intensity,
            heat_duration_hours=self.heat_duration_hours,
            offspring_count=self.offspring_count,
            outcome=self.outcome,
            ultrasound_result=self.ultrasound_result,
        )


class ReproductionEventCommit(ReproductionEventCreate):
    confirmed: bool = Field(
        False, description="Operator override for events that need confirmation"
    )


class DecisionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    outcome: DecisionOutcome
    reason: str | None = None
    rule: str | None = None
    details: dict[str, Any] = {}


class CommitResultResponse(BaseModel):
    record: ReproductionRecordResponse
    mirrored_record: ReproductionRecordResponse | None = None
    subject_written: bool
    partner_written: bool


class EnsureBirthRequest(BaseModel):
    birth_date: date
    newborn_name: str = Field(..., min_length=1)
    newborn_tag_id: str = Field(..., min_length=1)
    sire_id: UUID | None = None


class EnsureBirthResponse(BaseModel):
    created: bool
    record: ReproductionRecordResponse | None = None


class ReproductiveStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    status: str
    last_event: ReproductionRecordResponse | None = None
    days_in_status: int | None = None
    expected_due_date: date | None = None
