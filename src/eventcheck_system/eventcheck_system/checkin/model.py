from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import CheckInOutcome
from ..core.exceptions import AlreadyInStateError, DomainError, FormatError, NotFoundError
from ..participants.model import Participant


@dataclass(frozen=True)
class CheckInResult:
    outcome: CheckInOutcome
    message: str
    participant: Optional[Participant] = None
    checked_in_at: Optional[datetime] = None

    @property
    def success(self) -> bool:
        return self.outcome == CheckInOutcome.CHECKED_IN

    @property
    def already_checked_in(self) -> bool:
        return self.outcome == CheckInOutcome.ALREADY_CHECKED_IN

    @property
    def error(self) -> Optional[DomainError]:
        """The domain error matching a non-success outcome, for callers that dispatch on error kind."""

        if self.outcome == CheckInOutcome.INVALID_FORMAT:
            return FormatError(self.message)
        if self.outcome == CheckInOutcome.NOT_FOUND:
            return NotFoundError("Participant", "token")
        if self.outcome == CheckInOutcome.ALREADY_CHECKED_IN:
            return AlreadyInStateError(self.message, checked_in_at=self.checked_in_at)
        return None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "outcome": self.outcome.value,
            "message": self.message,
            "already_checked_in": self.already_checked_in,
            "participant": self.participant.to_dict() if self.participant else None,
            "checked_in_at": self.checked_in_at.isoformat() if self.checked_in_at else None,
        }


@dataclass(frozen=True)
class PinVerification:
    valid: bool
    message: str
    event_id: Optional[str] = None
    event_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {"valid": self.valid, "message": self.message, "event_id": self.event_id, "event_name": self.event_name}


@dataclass(frozen=True)
class ScanPage:
    event_slug: str
    event_name: str
    event_date: datetime
    venue: str
