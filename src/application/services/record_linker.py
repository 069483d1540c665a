from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import (
    AppError,
    ConflictError,
    PartialCommitFailure,
    PartnerNotFound,
)
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.animal import Animal
from src.domain.models.reproduction_record import ReproductionRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommitResult:
    record: ReproductionRecord
    subject_written: bool
    partner_written: bool
    mirrored_record: ReproductionRecord | None = None
    error: PartialCommitFailure | None = None


async def _append(uow: UnitOfWork, animal: Animal, record: ReproductionRecord) -> Animal:
    updated = await uow.animals.update(
        animal.id,
        data={"reproduction_records": [*animal.reproduction_records, record]},
        expected_version=animal.version,
    )
    if updated is None:
        raise ConflictError(
            f"Animal {animal.id} was modified concurrently; reload and retry",
            details={"animal_id": str(animal.id), "expected_version": animal.version},
        )
    await uow.commit()
    return updated


async def commit(
    uow: UnitOfWork,
    subject: Animal,
    partner: Animal | None,
    record: ReproductionRecord,
) -> CommitResult:
    """Append an accepted record to the subject and mirror matings onto the partner.

    The two writes are committed separately. A failure on the subject write
    propagates unchanged; a failure on the partner write leaves the subject
    record in place and is reported through `CommitResult.error`.
    """
    if record.is_dyadic() and (partner is None or partner.id != record.mate_id):
        raise PartnerNotFound(
            f"Mating partner {record.mate_id} not found",
            rule="partner_not_found",
            details={"partner_id": str(record.mate_id)},
        )

    await _append(uow, subject, record)
    logger.info("Recorded %s %s on animal %s", record.type.value, record.id, subject.id)

    if not record.is_dyadic():
        return CommitResult(record=record, subject_written=True, partner_written=False)

    mirrored = record.mirrored_for(subject.id)
    try:
        await _append(uow, partner, mirrored)
    except AppError as exc:
        await uow.rollback()
        logger.warning(
            "Mirror of %s onto partner %s failed after subject %s was written: %s",
            record.id,
            partner.id,
            subject.id,
            exc.message,
        )
        error = PartialCommitFailure(
            f"Mating recorded on {subject.tag_id} but not mirrored on {partner.tag_id}: "
            f"{exc.message}",
            subject_written=True,
            partner_written=False,
            details={
                "subject_id": str(subject.id),
                "partner_id": str(partner.id),
                "record_id": str(record.id),
                "cause": exc.code,
            },
        )
        return CommitResult(
            record=record, subject_written=True, partner_written=False, error=error
        )

    logger.info("Mirrored mating %s onto partner %s as %s", record.id, partner.id, mirrored.id)
    return CommitResult(
        record=record, subject_written=True, partner_written=True, mirrored_record=mirrored
    )
