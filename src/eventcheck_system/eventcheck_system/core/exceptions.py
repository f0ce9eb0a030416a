from __future__ import annotations

from datetime import datetime
from typing import Optional

from .enums import ErrorKind, RowCheck


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = ErrorKind.FORMAT


class FormatError(ValidationError):
    """Bad CSV header, undecodable upload or malformed token."""

    kind = ErrorKind.FORMAT

    def __init__(self, message: str, *, column: Optional[str] = None):
        super().__init__(message)
        self.column = column


class EmptyInputError(ValidationError):
    """Upload carries no data rows at all."""

    kind = ErrorKind.EMPTY_INPUT


class RowValidationError(ValidationError):
    """One rejected CSV row. Collected per row, never raised for a batch."""

    kind = ErrorKind.ROW_VALIDATION

    def __init__(self, *, row_number: int, check: RowCheck, detail: str):
        super().__init__(f"Row {row_number}: {detail}")
        self.row_number = row_number
        self.check = check
        self.detail = detail

    def to_dict(self) -> dict:
        return {"row": self.row_number, "check": self.check.value, "detail": self.detail}


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, key: object):
        super().__init__(f"{resource} not found: {key}")
        self.resource = resource
        self.key = key


class AuthorizationError(DomainError):
    """Raised when the caller does not own the event, or a station PIN is wrong."""

    kind = ErrorKind.AUTHORIZATION


class AlreadyInStateError(DomainError):
    """Token was already consumed. A distinguishable outcome, not a failure."""

    kind = ErrorKind.ALREADY_IN_STATE

    def __init__(self, message: str, *, checked_in_at: Optional[datetime] = None):
        super().__init__(message)
        self.checked_in_at = checked_in_at


class DeliveryError(DomainError):
    kind = ErrorKind.DELIVERY

    def __init__(self, recipient: str, cause: object):
        super().__init__(f"Delivery to {recipient} failed: {cause}")
        self.recipient = recipient
        self.cause = cause


class PersistenceError(DomainError):
    """Storage failed; the whole unit of work was rolled back."""

    kind = ErrorKind.PERSISTENCE

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
