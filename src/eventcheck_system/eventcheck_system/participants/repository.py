from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import NewParticipant, Participant


class ParticipantRepository(Protocol):
    """Participant store contract.

    Every mutation is a single atomic statement or transaction:
    `bulk_create` is all-or-nothing, `mark_checked_in` and `mark_sent` are
    conditional updates that only flip a flag that is still False.
    """

    def bulk_create(self, participants: Sequence[NewParticipant]) -> int:
        """Insert all rows in one transaction; raise PersistenceError and keep nothing on failure."""

        raise NotImplementedError

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        raise NotImplementedError

    def get_by_token(self, token: str) -> Optional[Participant]:
        raise NotImplementedError

    def list_by_event(self, event_id: str) -> Sequence[Participant]:
        raise NotImplementedError

    def list_pending_dispatch(self, event_id: str) -> Sequence[Participant]:
        raise NotImplementedError

    def count_by_event(self, event_id: str) -> int:
        raise NotImplementedError

    def count_checked_in_by_event(self, event_id: str) -> int:
        raise NotImplementedError

    def list_recent_checkins(self, event_id: str, limit: int) -> Sequence[Participant]:
        """Checked-in participants, latest `checked_in_at` first."""

        raise NotImplementedError

    def mark_checked_in(self, token: str, *, at: datetime, event_id: Optional[str] = None) -> bool:
        """Set checked_in where still False. True only for the caller that flipped it."""

        raise NotImplementedError

    def mark_sent(self, participant_id: int, *, at: datetime) -> bool:
        """Set qr_sent where still False. Never touches an existing qr_sent_at."""

        raise NotImplementedError

    def delete_by_event(self, event_id: str) -> int:
        raise NotImplementedError
