from __future__ import annotations

from ..core.constants import RECENT_CHECKINS_LIMIT
from ..events.repository import EventRepository
from ..events.service import require_event_by_slug
from ..participants.repository import ParticipantRepository
from .model import EventStats


def checkin_percentage(checked_in: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return 100.0 * checked_in / total


class StatsService:
    """Live dashboard numbers, recomputed from the store on every call."""

    def __init__(self, participants: ParticipantRepository, events: EventRepository, *, recent_limit: int = RECENT_CHECKINS_LIMIT):
        self._participants = participants
        self._events = events
        self._recent_limit = int(recent_limit)

    def get_event_stats(self, event_slug: str) -> EventStats:
        event = require_event_by_slug(self._events, event_slug)

        total = self._participants.count_by_event(event.event_id)
        checked_in = self._participants.count_checked_in_by_event(event.event_id)

        recent = sorted(
            (p for p in self._participants.list_recent_checkins(event.event_id, self._recent_limit) if p.checked_in_at),
            key=lambda p: p.checked_in_at,
            reverse=True,
        )[: self._recent_limit]

        return EventStats(
            event_id=event.event_id,
            event_name=event.name,
            total_participants=total,
            checked_in_count=checked_in,
            not_checked_in_count=total - checked_in,
            checkin_percentage=checkin_percentage(checked_in, total),
            last_checkin_at=recent[0].checked_in_at if recent else None,
            recent_checkins=recent,
        )
