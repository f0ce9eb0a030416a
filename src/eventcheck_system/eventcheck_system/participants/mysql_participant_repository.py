from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewParticipant, Participant
from .repository import ParticipantRepository

_COLUMNS = """
    participant_id, event_id, name, email, phone, qr_token,
    qr_sent, qr_sent_at, checked_in, checked_in_at, created_at
"""


def _row_to_participant(r: dict) -> Participant:
    return Participant(
        participant_id=int(r["participant_id"]),
        event_id=str(r["event_id"]),
        name=r["name"],
        email=r["email"],
        phone=r["phone"],
        token=r["qr_token"],
        qr_sent=bool(r["qr_sent"]),
        qr_sent_at=r.get("qr_sent_at"),
        checked_in=bool(r["checked_in"]),
        checked_in_at=r.get("checked_in_at"),
        created_at=r.get("created_at"),
    )


class MySQLParticipantRepository(ParticipantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def bulk_create(self, participants: Sequence[NewParticipant]) -> int:
        if not participants:
            return 0

        # One transaction: db_cursor rolls everything back if any row fails.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO participants (event_id, name, email, phone, qr_token, qr_sent, checked_in)
                VALUES (%s, %s, %s, %s, %s, FALSE, FALSE)
                """,
                [(p.event_id, p.name, p.email, p.phone, p.token) for p in participants],
            )
            return len(participants)

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM participants WHERE participant_id=%s", (int(participant_id),))
            r = fetchone(cur)
            return _row_to_participant(r) if r else None

    def get_by_token(self, token: str) -> Optional[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM participants WHERE qr_token=%s", (token,))
            r = fetchone(cur)
            return _row_to_participant(r) if r else None

    def list_by_event(self, event_id: str) -> Sequence[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM participants
                WHERE event_id=%s
                ORDER BY created_at DESC, participant_id DESC
                """,
                (event_id,),
            )
            return [_row_to_participant(r) for r in fetchall(cur)]

    def list_pending_dispatch(self, event_id: str) -> Sequence[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM participants
                WHERE event_id=%s AND qr_sent=FALSE
                ORDER BY created_at ASC, participant_id ASC
                """,
                (event_id,),
            )
            return [_row_to_participant(r) for r in fetchall(cur)]

    def count_by_event(self, event_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM participants WHERE event_id=%s", (event_id,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def count_checked_in_by_event(self, event_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM participants WHERE event_id=%s AND checked_in=TRUE",
                (event_id,),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def list_recent_checkins(self, event_id: str, limit: int) -> Sequence[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM participants
                WHERE event_id=%s AND checked_in=TRUE
                ORDER BY checked_in_at DESC, participant_id DESC
                LIMIT %s
                """,
                (event_id, int(limit)),
            )
            return [_row_to_participant(r) for r in fetchall(cur)]

    def mark_checked_in(self, token: str, *, at: datetime, event_id: Optional[str] = None) -> bool:
        clauses = ["qr_token=%s", "checked_in=FALSE"]
        params: list[object] = [at, token]
        if event_id is not None:
            clauses.append("event_id=%s")
            params.append(event_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE participants SET checked_in=TRUE, checked_in_at=%s WHERE {' AND '.join(clauses)}",
                tuple(params),
            )
            return cur.rowcount == 1

    def mark_sent(self, participant_id: int, *, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE participants SET qr_sent=TRUE, qr_sent_at=%s WHERE participant_id=%s AND qr_sent=FALSE",
                (at, int(participant_id)),
            )
            return cur.rowcount == 1

    def delete_by_event(self, event_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM participants WHERE event_id=%s", (event_id,))
            return int(cur.rowcount)
