from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.application.use_cases.reproduction import (
    commit_event,
    ensure_birth_recorded,
    get_reproductive_status,
    validate_event,
)
from src.config.settings import Settings
from src.interfaces.http.deps import get_app_settings, get_today, get_uow
from src.interfaces.http.schemas.animals import ReproductionRecordResponse
from src.interfaces.http.schemas.reproduction import (
    CommitResultResponse,
    DecisionResponse,
    EnsureBirthRequest,
    EnsureBirthResponse,
    ReproductionEventCommit,
    ReproductionEventCreate,
    ReproductiveStatusResponse,
)

router = APIRouter(prefix="/animals/{animal_id}", tags=["reproduction"])


@router.post("/reproduction/validate", response_model=DecisionResponse)
async def validate_reproduction_event(
    animal_id: UUID,
    payload: ReproductionEventCreate,
    today: date = Depends(get_today),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
) -> DecisionResponse:
    """Dry-run the reproduction rules without writing anything."""
    decision = await validate_event.execute(
        uow,
        validate_event.ValidateEventInput(subject_id=animal_id, draft=payload.to_draft()),
        today=today,
        rules=settings.reproduction_rules(),
    )
    return DecisionResponse(
        outcome=decision.outcome,
        reason=decision.reason,
        rule=decision.rule.value if decision.rule else None,
        details=decision.details,
    )


@router.post(
    "/reproduction",
    status_code=status.HTTP_201_CREATED,
    response_model=CommitResultResponse,
)
async def record_reproduction_event(
    animal_id: UUID,
    payload: ReproductionEventCommit,
    today: date = Depends(get_today),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
) -> CommitResultResponse:
    """Validate and record an event.

    Matings with a mate are mirrored onto the mate. Events that need
    confirmation are refused with 409 until resent with `confirmed: true`.
    A failed mirror after the subject write answers 502 `partial_commit`.
    """
    result = await commit_event.execute(
        uow,
        commit_event.CommitEventInput(
            subject_id=animal_id, draft=payload.to_draft(), confirmed=payload.confirmed
        ),
        today=today,
        rules=settings.reproduction_rules(),
    )
    if result.error is not None:
        raise result.error
    return CommitResultResponse(
        record=ReproductionRecordResponse.model_validate(result.record),
        mirrored_record=ReproductionRecordResponse.model_validate(result.mirrored_record)
        if result.mirrored_record
        else None,
        subject_written=result.subject_written,
        partner_written=result.partner_written,
    )


@router.post("/births/ensure", response_model=EnsureBirthResponse)
async def ensure_birth(
    animal_id: UUID,
    payload: EnsureBirthRequest,
    uow=Depends(get_uow),
) -> EnsureBirthResponse:
    record = await ensure_birth_recorded.execute(
        uow,
        ensure_birth_recorded.EnsureBirthInput(dam_id=animal_id, **payload.model_dump()),
    )
    return EnsureBirthResponse(
        created=record is not None,
        record=ReproductionRecordResponse.model_validate(record) if record else None,
    )


@router.get("/reproduction/status", response_model=ReproductiveStatusResponse)
async def reproductive_status(
    animal_id: UUID,
    today: date = Depends(get_today),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
) -> ReproductiveStatusResponse:
    result = await get_reproductive_status.execute(
        uow, animal_id, today=today, rules=settings.reproduction_rules()
    )
    return ReproductiveStatusResponse(
        animal_id=result.animal_id,
        status=result.status.value,
        last_event=ReproductionRecordResponse.model_validate(result.last_event)
        if result.last_event
        else None,
        days_in_status=result.days_in_status,
        expected_due_date=result.expected_due_date,
    )
