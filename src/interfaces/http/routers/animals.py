from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.application.use_cases.animals import create_animal, get_animal
from src.interfaces.http.deps import get_today, get_uow
from src.interfaces.http.schemas.animals import (
    AnimalCreate,
    AnimalCreateResponse,
    AnimalResponse,
    ReproductionRecordResponse,
)

router = APIRouter(prefix="/animals", tags=["animals"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=AnimalCreateResponse)
async def register_animal(
    payload: AnimalCreate,
    today: date = Depends(get_today),
    uow=Depends(get_uow),
) -> AnimalCreateResponse:
    """Register an animal.

    When a dam is given and the animal was not purchased, a Birth is recorded
    on the dam for the animal's birth date (once per date).
    """
    result = await create_animal.execute(
        uow,
        create_animal.CreateAnimalInput(**payload.model_dump()),
        today=today,
    )
    return AnimalCreateResponse(
        animal=AnimalResponse.model_validate(result.animal),
        dam_birth_record=ReproductionRecordResponse.model_validate(result.dam_birth_record)
        if result.dam_birth_record
        else None,
        warnings=result.warnings,
    )


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal_endpoint(animal_id: UUID, uow=Depends(get_uow)) -> AnimalResponse:
    animal = await get_animal.execute(uow, animal_id)
    return AnimalResponse.model_validate(animal)
