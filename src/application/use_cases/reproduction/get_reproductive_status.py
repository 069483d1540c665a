from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.animal import Animal
from src.domain.models.reproduction_record import (
    ReproductionEventType,
    ReproductionRecord,
    UltrasoundResult,
)
from src.domain.services.reproduction_validator import ReproductionRules
from src.domain.value_objects.gender import Gender


class ReproductiveStatus(str, Enum):
    AVAILABLE = "Available"
    IN_HEAT = "InHeat"
    AWAITING_CONFIRMATION = "AwaitingConfirmation"
    PREGNANT = "Pregnant"
    LACTATING = "Lactating"


@dataclass(slots=True)
class ReproductiveStatusOutput:
    animal_id: UUID
    status: ReproductiveStatus
    last_event: ReproductionRecord | None = None
    days_in_status: int | None = None
    expected_due_date: date | None = None


def derive_status(
    animal: Animal, today: date, rules: ReproductionRules
) -> ReproductiveStatusOutput:
    # sorted() is stable, so same-day records keep insertion order
    history = sorted(animal.reproduction_records, key=lambda r: r.date)
    if not history:
        return ReproductiveStatusOutput(animal_id=animal.id, status=ReproductiveStatus.AVAILABLE)

    last = history[-1]
    days = (today - last.date).days
    status = ReproductiveStatus.AVAILABLE
    if last.type == ReproductionEventType.HEAT:
        status = ReproductiveStatus.IN_HEAT
    elif last.type == ReproductionEventType.MATING:
        if days < rules.awaiting_confirmation_days:
            status = ReproductiveStatus.AWAITING_CONFIRMATION
    elif last.type == ReproductionEventType.ULTRASOUND:
        if last.ultrasound_result == UltrasoundResult.POSITIVE:
            status = ReproductiveStatus.PREGNANT
        elif last.ultrasound_result is None:
            status = ReproductiveStatus.AWAITING_CONFIRMATION
    elif last.type in (ReproductionEventType.BIRTH, ReproductionEventType.LACTATION):
        status = ReproductiveStatus.LACTATING

    expected_due_date = None
    if status in (ReproductiveStatus.PREGNANT, ReproductiveStatus.AWAITING_CONFIRMATION):
        matings = [
            r for r in history if r.type == ReproductionEventType.MATING and r.date <= last.date
        ]
        if matings:
            expected_due_date = matings[-1].date + timedelta(days=rules.expected_gestation_days)

    return ReproductiveStatusOutput(
        animal_id=animal.id,
        status=status,
        last_event=last,
        days_in_status=days,
        expected_due_date=expected_due_date,
    )


async def execute(
    uow: UnitOfWork,
    animal_id: UUID,
    *,
    today: date | None = None,
    rules: ReproductionRules | None = None,
) -> ReproductiveStatusOutput:
    animal = await uow.animals.get(animal_id)
    if not animal:
        raise NotFound(f"Animal {animal_id} not found")
    if animal.gender == Gender.MALE:
        raise ValidationError("Reproductive status only applies to female animals")
    return derive_status(animal, today or date.today(), rules or ReproductionRules())
