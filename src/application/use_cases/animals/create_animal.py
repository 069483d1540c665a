from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from src.application.errors import AppError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.reproduction import ensure_birth_recorded
from src.domain.models.animal import Animal
from src.domain.models.reproduction_record import ReproductionRecord
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.gender import Gender

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateAnimalInput:
    name: str
    tag_id: str
    gender: Gender
    birth_date: date
    breed: str | None = None
    status: AnimalStatus = AnimalStatus.ACTIVE
    photo_url: str | None = None
    # Genealogy fields
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    was_purchased: bool = False


@dataclass(slots=True)
class CreateAnimalOutput:
    animal: Animal
    dam_birth_record: ReproductionRecord | None = None
    warnings: list[str] = field(default_factory=list)


async def execute(
    uow: UnitOfWork,
    payload: CreateAnimalInput,
    *,
    today: date | None = None,
) -> CreateAnimalOutput:
    today = today or date.today()
    if payload.birth_date > today:
        raise ValidationError("Birth date cannot be in the future")
    if payload.status not in (AnimalStatus.ACTIVE, AnimalStatus.EXTERNAL):
        raise ValidationError("New animals must be Active or External")

    dam = None
    if payload.dam_id:
        dam = await uow.animals.get(payload.dam_id)
        if not dam:
            raise NotFound(f"Dam {payload.dam_id} not found")
        if dam.gender != Gender.FEMALE:
            raise ValidationError(f"Dam {dam.name} ({dam.tag_id}) must be female")
    if payload.sire_id:
        sire = await uow.animals.get(payload.sire_id)
        if not sire:
            raise NotFound(f"Sire {payload.sire_id} not found")
        if sire.gender != Gender.MALE:
            raise ValidationError(f"Sire {sire.name} ({sire.tag_id}) must be male")

    animal = Animal.create(
        name=payload.name,
        tag_id=payload.tag_id,
        gender=payload.gender,
        birth_date=payload.birth_date,
        breed=payload.breed,
        status=payload.status,
        photo_url=payload.photo_url,
        sire_id=payload.sire_id,
        dam_id=payload.dam_id,
    )
    created = await uow.animals.add(animal)
    await uow.commit()
    output = CreateAnimalOutput(animal=created)

    # Home-born animals imply a birth on the dam; purchases and external
    # ancestors do not
    if dam is None or payload.was_purchased or payload.status == AnimalStatus.EXTERNAL:
        return output
    try:
        output.dam_birth_record = await ensure_birth_recorded.ensure_for_dam(
            uow,
            dam,
            created.birth_date,
            created.name,
            created.tag_id,
            created.sire_id,
        )
    except AppError as exc:
        # best-effort; the animal is already registered
        logger.warning("Failed to record birth on dam %s: %s", dam.id, exc.message)
        output.warnings.append(f"Birth not recorded on dam {dam.tag_id}: {exc.message}")
    return output
