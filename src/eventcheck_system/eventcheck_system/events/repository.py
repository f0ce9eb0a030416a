from __future__ import annotations

from typing import Optional, Protocol

from .model import Event


class EventRepository(Protocol):
    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def get_by_slug(self, slug: str) -> Optional[Event]:
        raise NotImplementedError

    def is_owned_by(self, event_id: str, organizer_id: int) -> bool:
        raise NotImplementedError
