from __future__ import annotations

from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Event
from .repository import EventRepository


def require_owned_event(events: EventRepository, *, organizer_id: int, event_id: str) -> Event:
    """Load an event the organizer owns, or raise NotFoundError / AuthorizationError."""

    event = events.get_by_id(event_id)
    if not event:
        raise NotFoundError("Event", event_id)
    if not events.is_owned_by(event_id, int(organizer_id)):
        raise AuthorizationError("This event does not belong to the organizer")
    return event


def require_event_by_slug(events: EventRepository, slug: str) -> Event:
    event = events.get_by_slug(slug)
    if not event:
        raise NotFoundError("Event", slug)
    return event
