from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import DispatchOutcome


@dataclass(frozen=True)
class Notification:
    """One outgoing message. `image_png` is embedded inline under Content-ID `qrcode`."""

    to: str
    subject: str
    html_body: str
    image_png: Optional[bytes] = None


@dataclass(frozen=True)
class DeliveryFailure:
    participant_id: int
    email: str
    reason: str


@dataclass(frozen=True)
class DispatchResult:
    total: int
    sent: int
    failed: int
    failures: list[DeliveryFailure] = field(default_factory=list)

    @property
    def outcome(self) -> DispatchOutcome:
        if self.total == 0:
            return DispatchOutcome.NOTHING_PENDING
        if self.failed == 0:
            return DispatchOutcome.ALL_SENT
        if self.sent == 0:
            return DispatchOutcome.ALL_FAILED
        return DispatchOutcome.PARTIAL

    @property
    def failed_emails(self) -> list[str]:
        return [f.email for f in self.failures]

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "total_participants": self.total,
            "emails_sent": self.sent,
            "emails_failed": self.failed,
            "failed_emails": self.failed_emails,
            "failures": [{"participant_id": f.participant_id, "email": f.email, "reason": f.reason} for f in self.failures],
        }
