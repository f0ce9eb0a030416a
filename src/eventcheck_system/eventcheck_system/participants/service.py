from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..events.repository import EventRepository
from ..events.service import require_owned_event
from .csv_parser import parse_participants
from .model import Participant, UploadResult
from .repository import ParticipantRepository
from .rules.factory import RowRuleFactory
from .tokens import issue_tokens

logger = logging.getLogger(__name__)


class ParticipantService:
    """Bulk ingestion: parse, validate, issue tokens, persist atomically."""

    def __init__(
        self,
        participants: ParticipantRepository,
        events: EventRepository,
        *,
        rule_factory: Optional[RowRuleFactory] = None,
    ):
        self._participants = participants
        self._events = events
        self._rules = rule_factory or RowRuleFactory()

    def upload_participants(self, *, organizer_id: int, event_id: str, stream: Iterable[str]) -> UploadResult:
        require_owned_event(self._events, organizer_id=organizer_id, event_id=event_id)

        parsed = parse_participants(stream, rules=self._rules)
        batch = issue_tokens(event_id, parsed.drafts)

        created = 0
        if batch:
            # PersistenceError propagates: nothing of this upload was stored.
            created = self._participants.bulk_create(batch)

        logger.info(
            "Upload for event %s: %d created, %d rows rejected",
            event_id,
            created,
            parsed.rejected_rows,
        )
        return UploadResult(success=created, failed=parsed.rejected_rows, row_errors=list(parsed.row_errors))

    def list_participants(self, *, organizer_id: int, event_id: str) -> Sequence[Participant]:
        require_owned_event(self._events, organizer_id=organizer_id, event_id=event_id)
        return self._participants.list_by_event(event_id)
