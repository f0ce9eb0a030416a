from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Event:
    """Event as seen by this engine: referenced, never created or edited here."""

    event_id: str
    organizer_id: int
    name: str
    slug: str
    event_date: datetime
    venue: str
    scanner_pin: str
    participant_count: int = 0
    created_at: Optional[datetime] = None
