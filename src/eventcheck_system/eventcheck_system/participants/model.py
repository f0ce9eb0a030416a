from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import ParticipantStatus
from ..core.exceptions import RowValidationError


@dataclass(frozen=True)
class Participant:
    """Domain entity: one registered participant of one event.

    `qr_sent` and `checked_in` only ever go from False to True.
    """

    participant_id: int
    event_id: str
    name: str
    email: str
    phone: str
    token: str
    qr_sent: bool = False
    qr_sent_at: Optional[datetime] = None
    checked_in: bool = False
    checked_in_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def status(self) -> ParticipantStatus:
        return ParticipantStatus.CHECKED_IN if self.checked_in else ParticipantStatus.REGISTERED

    def to_dict(self) -> dict:
        return {
            "id": self.participant_id,
            "event_id": self.event_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "qr_sent": self.qr_sent,
            "qr_sent_at": self.qr_sent_at.isoformat() if self.qr_sent_at else None,
            "checked_in": self.checked_in,
            "checked_in_at": self.checked_in_at.isoformat() if self.checked_in_at else None,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ParticipantDraft:
    """A CSV row that passed validation; no token yet."""

    name: str
    email: str
    phone: str
    row_number: int


@dataclass(frozen=True)
class NewParticipant:
    """Draft with its issued token, ready for bulk insert."""

    event_id: str
    name: str
    email: str
    phone: str
    token: str


@dataclass(frozen=True)
class ParseResult:
    drafts: list[ParticipantDraft] = field(default_factory=list)
    row_errors: list[RowValidationError] = field(default_factory=list)

    @property
    def rejected_rows(self) -> int:
        return len({e.row_number for e in self.row_errors})


@dataclass(frozen=True)
class UploadResult:
    success: int
    failed: int
    row_errors: list[RowValidationError] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "failed": self.failed,
            "failed_reasons": [str(e) for e in self.row_errors],
            "row_errors": [e.to_dict() for e in self.row_errors],
        }
