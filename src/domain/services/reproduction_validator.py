"""Rules deciding whether a reproduction event may be recorded on an animal.

The validator works only on the animals it is given; it never reads storage
or the wall clock, so callers pass the current date explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from src.domain.models.animal import Animal
from src.domain.models.reproduction_record import ReproductionEventType, ReproductionRecordDraft


class DecisionOutcome(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    NEEDS_CONFIRMATION = "needs_confirmation"


class Rule(str, Enum):
    FUTURE_DATE = "future_date"
    BEFORE_BIRTH = "before_birth"
    SUBJECT_INELIGIBLE = "subject_ineligible"
    PARTNER_NOT_FOUND = "partner_not_found"
    PARTNER_INELIGIBLE = "partner_ineligible"
    GESTATION_TOO_SHORT = "gestation_too_short"
    GESTATION_TOO_LONG = "gestation_too_long"
    ULTRASOUND_TOO_EARLY = "ultrasound_too_early"
    WEANING_WITHOUT_BIRTH = "weaning_without_birth"
    WEANING_TOO_EARLY = "weaning_too_early"


@dataclass(slots=True, frozen=True)
class ReproductionRules:
    gestation_min_days: int = 140
    gestation_max_days: int = 160
    ultrasound_min_days: int = 20
    weaning_min_days: int = 30
    # Used by status reporting, not by validation
    expected_gestation_days: int = 150
    awaiting_confirmation_days: int = 20


@dataclass(slots=True, frozen=True)
class Decision:
    outcome: DecisionOutcome
    reason: str | None = None
    rule: Rule | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def accepted(cls) -> Decision:
        return cls(outcome=DecisionOutcome.ACCEPTED)

    @classmethod
    def rejected(cls, rule: Rule, reason: str, **details: Any) -> Decision:
        return cls(outcome=DecisionOutcome.REJECTED, reason=reason, rule=rule, details=details)

    @classmethod
    def needs_confirmation(cls, rule: Rule, reason: str, **details: Any) -> Decision:
        return cls(
            outcome=DecisionOutcome.NEEDS_CONFIRMATION, reason=reason, rule=rule, details=details
        )

    @property
    def is_accepted(self) -> bool:
        return self.outcome == DecisionOutcome.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.outcome == DecisionOutcome.REJECTED

    @property
    def needs_override(self) -> bool:
        return self.outcome == DecisionOutcome.NEEDS_CONFIRMATION


def validate(
    subject: Animal,
    partner: Animal | None,
    proposed: ReproductionRecordDraft,
    today: date,
    rules: ReproductionRules | None = None,
) -> Decision:
    """Evaluate `proposed` against `subject`'s history, stopping at the first failure."""
    rules = rules or ReproductionRules()

    if proposed.date > today:
        return Decision.rejected(
            Rule.FUTURE_DATE,
            f"Future date not allowed ({proposed.date.isoformat()} is after "
            f"{today.isoformat()})",
            date=proposed.date.isoformat(),
            today=today.isoformat(),
        )

    if proposed.date < subject.birth_date:
        return Decision.rejected(
            Rule.BEFORE_BIRTH,
            f"Event precedes subject's birth ({proposed.date.isoformat()} is before "
            f"{subject.birth_date.isoformat()})",
            date=proposed.date.isoformat(),
            birth_date=subject.birth_date.isoformat(),
        )

    if not subject.status.accepts_new_events():
        return Decision.rejected(
            Rule.SUBJECT_INELIGIBLE,
            f"Subject is not eligible for new events (status {subject.status.value})",
            status=subject.status.value,
        )

    if proposed.type == ReproductionEventType.MATING and proposed.mate_id is not None:
        return _check_partner(subject, partner, proposed)

    if proposed.type == ReproductionEventType.BIRTH:
        return _check_gestation(subject, proposed, rules)

    if proposed.type == ReproductionEventType.ULTRASOUND:
        return _check_ultrasound(subject, proposed, rules)

    if proposed.type == ReproductionEventType.WEANING:
        return _check_weaning(subject, proposed, rules)

    return Decision.accepted()


def _check_partner(
    subject: Animal, partner: Animal | None, proposed: ReproductionRecordDraft
) -> Decision:
    if partner is None or partner.id != proposed.mate_id:
        return Decision.rejected(
            Rule.PARTNER_NOT_FOUND,
            f"Mating partner {proposed.mate_id} not found",
            partner_id=str(proposed.mate_id),
        )
    if partner.id == subject.id:
        return Decision.rejected(
            Rule.PARTNER_INELIGIBLE,
            "An animal cannot be recorded as its own mating partner",
            partner_id=str(partner.id),
        )
    if not partner.status.accepts_new_events():
        return Decision.rejected(
            Rule.PARTNER_INELIGIBLE,
            f"Mating partner {partner.name} ({partner.tag_id}) is not eligible "
            f"(status {partner.status.value})",
            partner_id=str(partner.id),
            status=partner.status.value,
        )
    return Decision.accepted()


def _check_gestation(
    subject: Animal, proposed: ReproductionRecordDraft, rules: ReproductionRules
) -> Decision:
    last_mating = subject.last_record_before(ReproductionEventType.MATING, proposed.date)
    if last_mating is None:
        return Decision.accepted()
    days = (proposed.date - last_mating.date).days
    if days < rules.gestation_min_days:
        return Decision.rejected(
            Rule.GESTATION_TOO_SHORT,
            f"{days} days since mating, minimum {rules.gestation_min_days}",
            days=days,
            minimum=rules.gestation_min_days,
            mating_date=last_mating.date.isoformat(),
        )
    if days > rules.gestation_max_days:
        return Decision.needs_confirmation(
            Rule.GESTATION_TOO_LONG,
            f"Unusually long gestation: {days} days since mating, "
            f"expected at most {rules.gestation_max_days}",
            days=days,
            maximum=rules.gestation_max_days,
            mating_date=last_mating.date.isoformat(),
        )
    return Decision.accepted()


def _check_ultrasound(
    subject: Animal, proposed: ReproductionRecordDraft, rules: ReproductionRules
) -> Decision:
    last_mating = subject.last_record_before(ReproductionEventType.MATING, proposed.date)
    if last_mating is None:
        return Decision.accepted()
    days = (proposed.date - last_mating.date).days
    if days < rules.ultrasound_min_days:
        return Decision.rejected(
            Rule.ULTRASOUND_TOO_EARLY,
            f"Too early for reliable result: {days} days since mating, "
            f"minimum {rules.ultrasound_min_days}",
            days=days,
            minimum=rules.ultrasound_min_days,
            mating_date=last_mating.date.isoformat(),
        )
    return Decision.accepted()


def _check_weaning(
    subject: Animal, proposed: ReproductionRecordDraft, rules: ReproductionRules
) -> Decision:
    last_birth = subject.last_record_before(ReproductionEventType.BIRTH, proposed.date)
    if last_birth is None:
        return Decision.rejected(Rule.WEANING_WITHOUT_BIRTH, "No prior birth on record")
    days = (proposed.date - last_birth.date).days
    if days < rules.weaning_min_days:
        return Decision.rejected(
            Rule.WEANING_TOO_EARLY,
            f"Too soon after birth: {days} days since birth, minimum {rules.weaning_min_days}",
            days=days,
            minimum=rules.weaning_min_days,
            birth_date=last_birth.date.isoformat(),
        )
    return Decision.accepted()
