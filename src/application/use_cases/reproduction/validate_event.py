from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.animal import Animal
from src.domain.models.reproduction_record import ReproductionEventType, ReproductionRecordDraft
from src.domain.services import reproduction_validator
from src.domain.services.reproduction_validator import Decision, ReproductionRules


@dataclass(slots=True)
class ValidateEventInput:
    subject_id: UUID
    draft: ReproductionRecordDraft


async def load_participants(
    uow: UnitOfWork, subject_id: UUID, draft: ReproductionRecordDraft
) -> tuple[Animal, Animal | None]:
    """Fetch the subject and, for matings with a declared mate, the partner.

    A missing partner is returned as None so the validator can name it.
    """
    subject = await uow.animals.get(subject_id)
    if not subject:
        raise NotFound(f"Animal {subject_id} not found")
    partner = None
    if draft.type == ReproductionEventType.MATING and draft.mate_id is not None:
        partner = await uow.animals.get(draft.mate_id)
    return subject, partner


async def execute(
    uow: UnitOfWork,
    payload: ValidateEventInput,
    *,
    today: date | None = None,
    rules: ReproductionRules | None = None,
) -> Decision:
    subject, partner = await load_participants(uow, payload.subject_id, payload.draft)
    return reproduction_validator.validate(
        subject, partner, payload.draft, today or date.today(), rules
    )
