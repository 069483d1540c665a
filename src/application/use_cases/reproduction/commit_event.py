from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import (
    PartnerIneligible,
    PartnerNotFound,
    ValidationNeedsConfirmation,
    ValidationRejected,
)
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services import record_linker
from src.application.services.record_linker import CommitResult
from src.application.use_cases.reproduction.validate_event import load_participants
from src.domain.models.reproduction_record import ReproductionRecord, ReproductionRecordDraft
from src.domain.services import reproduction_validator
from src.domain.services.reproduction_validator import Decision, ReproductionRules, Rule

logger = logging.getLogger(__name__)

_PARTNER_ERRORS = {
    Rule.PARTNER_NOT_FOUND: PartnerNotFound,
    Rule.PARTNER_INELIGIBLE: PartnerIneligible,
}


@dataclass(slots=True)
class CommitEventInput:
    subject_id: UUID
    draft: ReproductionRecordDraft
    confirmed: bool = False  # operator override for soft rules


def ensure_allowed(decision: Decision, confirmed: bool) -> None:
    if decision.is_rejected:
        error_cls = _PARTNER_ERRORS.get(decision.rule, ValidationRejected)
        raise error_cls(decision.reason, rule=decision.rule.value, details=decision.details)
    if decision.needs_override and not confirmed:
        raise ValidationNeedsConfirmation(
            decision.reason, rule=decision.rule.value, details=decision.details
        )


async def execute(
    uow: UnitOfWork,
    payload: CommitEventInput,
    *,
    today: date | None = None,
    rules: ReproductionRules | None = None,
) -> CommitResult:
    """Validate the draft against fresh state, then append it (and its mirror)."""
    subject, partner = await load_participants(uow, payload.subject_id, payload.draft)
    decision = reproduction_validator.validate(
        subject, partner, payload.draft, today or date.today(), rules
    )
    ensure_allowed(decision, payload.confirmed)
    if decision.needs_override:
        logger.info(
            "Operator override for %s on animal %s: %s",
            decision.rule.value,
            subject.id,
            decision.reason,
        )

    record = ReproductionRecord.from_draft(payload.draft)
    return await record_linker.commit(uow, subject, partner, record)
