from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500


class ValidationRejected(ValidationError):
    """A reproduction rule blocked the event; nothing was written."""

    code = "validation_rejected"

    def __init__(
        self, message: str, *, rule: str | None = None, details: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(message, details={"rule": rule, **(details or {})})
        self.rule = rule


class PartnerNotFound(ValidationRejected):
    code = "partner_not_found"


class PartnerIneligible(ValidationRejected):
    code = "partner_ineligible"


class ValidationNeedsConfirmation(AppError):
    """A soft rule fired; the caller must resubmit with an explicit override."""

    code = "confirmation_required"
    status_code = 409

    def __init__(
        self, message: str, *, rule: str | None = None, details: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(message, details={"rule": rule, **(details or {})})
        self.rule = rule


class RepositoryFailure(InfrastructureError):
    code = "repository_failure"


class PartialCommitFailure(AppError):
    """One side of a mirrored write landed and the other did not."""

    code = "partial_commit"
    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        subject_written: bool,
        partner_written: bool,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details={
                "subject_written": subject_written,
                "partner_written": partner_written,
                **(details or {}),
            },
        )
        self.subject_written = subject_written
        self.partner_written = partner_written
