from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Event
from .repository import EventRepository

_EVENT_COLUMNS = "event_id, organizer_id, name, slug, event_date, venue, scanner_pin, participant_count, created_at"


def _row_to_event(r: dict) -> Event:
    return Event(
        event_id=str(r["event_id"]),
        organizer_id=int(r["organizer_id"]),
        name=r["name"],
        slug=r["slug"],
        event_date=r["event_date"],
        venue=r["venue"],
        scanner_pin=str(r["scanner_pin"]),
        participant_count=int(r.get("participant_count") or 0),
        created_at=r.get("created_at"),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EVENT_COLUMNS} FROM events WHERE event_id=%s", (event_id,))
            r = fetchone(cur)
            return _row_to_event(r) if r else None

    def get_by_slug(self, slug: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EVENT_COLUMNS} FROM events WHERE slug=%s", (slug,))
            r = fetchone(cur)
            return _row_to_event(r) if r else None

    def is_owned_by(self, event_id: str, organizer_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS owned FROM events WHERE event_id=%s AND organizer_id=%s",
                (event_id, int(organizer_id)),
            )
            return fetchone(cur) is not None
