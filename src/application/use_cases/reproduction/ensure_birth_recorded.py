from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services import record_linker
from src.domain.models.animal import Animal
from src.domain.models.reproduction_record import ReproductionEventType, ReproductionRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EnsureBirthInput:
    dam_id: UUID
    birth_date: date
    newborn_name: str
    newborn_tag_id: str
    sire_id: UUID | None = None


async def ensure_for_dam(
    uow: UnitOfWork,
    dam: Animal,
    birth_date: date,
    newborn_name: str,
    newborn_tag_id: str,
    sire_id: UUID | None = None,
) -> ReproductionRecord | None:
    """Append a Birth on `dam` for `birth_date` unless one is already there.

    The newborn is the evidence of the gestation, so the record skips the
    reproduction rules and is never mirrored. Returns None on a no-op.
    """
    if dam.has_record_on(ReproductionEventType.BIRTH, birth_date):
        logger.info("Dam %s already has a birth on %s", dam.id, birth_date.isoformat())
        return None

    record = ReproductionRecord.birth(
        birth_date,
        offspring_count=1,
        notes=f"Birth of {newborn_name} ({newborn_tag_id})",
        sire_id=sire_id,
    )
    result = await record_linker.commit(uow, dam, None, record)
    return result.record


async def execute(uow: UnitOfWork, payload: EnsureBirthInput) -> ReproductionRecord | None:
    dam = await uow.animals.get(payload.dam_id)
    if not dam:
        raise NotFound(f"Dam {payload.dam_id} not found")
    return await ensure_for_dam(
        uow,
        dam,
        payload.birth_date,
        payload.newborn_name,
        payload.newborn_tag_id,
        payload.sire_id,
    )
