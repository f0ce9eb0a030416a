from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..participants.model import Participant


@dataclass(frozen=True)
class EventStats:
    event_id: str
    event_name: str
    total_participants: int
    checked_in_count: int
    not_checked_in_count: int
    checkin_percentage: float
    last_checkin_at: Optional[datetime] = None
    recent_checkins: list[Participant] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "event_name": self.event_name,
            "total_participants": self.total_participants,
            "checked_in_count": self.checked_in_count,
            "not_checked_in_count": self.not_checked_in_count,
            "checkin_percentage": self.checkin_percentage,
            "last_checkin_at": self.last_checkin_at.isoformat() if self.last_checkin_at else None,
            "recent_checkins": [p.to_dict() for p in self.recent_checkins],
        }
