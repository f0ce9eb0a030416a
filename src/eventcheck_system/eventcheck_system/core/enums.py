from __future__ import annotations

from enum import Enum


class ParticipantStatus(str, Enum):
    """Check-in lifecycle: REGISTERED -> CHECKED_IN, never back."""

    REGISTERED = "REGISTERED"
    CHECKED_IN = "CHECKED_IN"


class CheckInOutcome(str, Enum):
    CHECKED_IN = "CHECKED_IN"
    ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
    INVALID_FORMAT = "INVALID_FORMAT"
    NOT_FOUND = "NOT_FOUND"


class DispatchOutcome(str, Enum):
    """How a dispatch pass ended, as seen by the caller."""

    ALL_SENT = "ALL_SENT"
    PARTIAL = "PARTIAL"
    ALL_FAILED = "ALL_FAILED"
    NOTHING_PENDING = "NOTHING_PENDING"


class RowCheck(str, Enum):
    """Which per-row check rejected a CSV row."""

    NAME_EMPTY = "NAME_EMPTY"
    EMAIL_EMPTY = "EMAIL_EMPTY"
    PHONE_EMPTY = "PHONE_EMPTY"
    EMAIL_FORMAT = "EMAIL_FORMAT"
    FIELD_TOO_LONG = "FIELD_TOO_LONG"
    MALFORMED_ROW = "MALFORMED_ROW"


class ErrorKind(str, Enum):
    FORMAT = "FORMAT"
    EMPTY_INPUT = "EMPTY_INPUT"
    ROW_VALIDATION = "ROW_VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    AUTHORIZATION = "AUTHORIZATION"
    ALREADY_IN_STATE = "ALREADY_IN_STATE"
    DELIVERY = "DELIVERY"
    PERSISTENCE = "PERSISTENCE"
