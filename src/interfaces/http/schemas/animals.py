from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models.reproduction_record import (
    HeatIntensity,
    ReproductionEventType,
    UltrasoundResult,
)
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.gender import Gender


class AnimalCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    tag_id: str = Field(..., min_length=1, max_length=128)
    gender: Gender
    birth_date: date
    breed: str | None = None
    status: AnimalStatus = AnimalStatus.ACTIVE
    photo_url: str | None = None
    # Genealogy fields
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    was_purchased: bool = False


class ReproductionRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    date: date
    type: ReproductionEventType
    mate_id: UUID | None = None
    notes: str | None = None
    heat_intensity: HeatIntensity | None = None
    heat_duration_hours: int | None = None
    offspring_count: int | None = None
    outcome: str | None = None
    ultrasound_result: UltrasoundResult | None = None
    created_at: datetime


class HealthRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    date: date
    type: str
    description: str | None = None
    veterinarian: str | None = None
    notes: str | None = None


class AnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    tag_id: str
    gender: Gender
    birth_date: date
    breed: str | None
    status: AnimalStatus
    photo_url: str | None
    sire_id: UUID | None
    dam_id: UUID | None
    reproduction_records: list[ReproductionRecordResponse]
    health_records: list[HealthRecordResponse]
    created_at: datetime
    updated_at: datetime
    version: int


class AnimalCreateResponse(BaseModel):
    animal: AnimalResponse
    dam_birth_record: ReproductionRecordResponse | None = None
    warnings: list[str] = []
