from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

import pytest

from src.eventcheck_system.eventcheck_system.container import wire_services
from src.eventcheck_system.eventcheck_system.core.exceptions import DeliveryError, PersistenceError
from src.eventcheck_system.eventcheck_system.dispatch.model import Notification
from src.eventcheck_system.eventcheck_system.events.model import Event
from src.eventcheck_system.eventcheck_system.participants.model import NewParticipant, Participant

EVENT_ID = "0b6f1a2e-6a55-4a8e-9d1c-8f3c2f9a7b10"
OTHER_EVENT_ID = "5d3c9e71-2f4b-4c8a-b6e0-1a2b3c4d5e6f"
ORGANIZER_ID = 1
OTHER_ORGANIZER_ID = 2


def make_token(n: int) -> str:
    return f"{n:032x}"


class InMemoryEvents:
    def __init__(self, events: Sequence[Event] = ()):
        self._by_id = {e.event_id: e for e in events}

    def get_by_id(self, event_id: str) -> Optional[Event]:
        return self._by_id.get(event_id)

    def get_by_slug(self, slug: str) -> Optional[Event]:
        return next((e for e in self._by_id.values() if e.slug == slug), None)

    def is_owned_by(self, event_id: str, organizer_id: int) -> bool:
        e = self._by_id.get(event_id)
        return bool(e and e.organizer_id == organizer_id)


class InMemoryParticipants:
    """Participant store with the same atomicity promises as the MySQL one.

    A lock stands in for the database's row-level check-and-set.
    """

    def __init__(self):
        self._rows: dict[int, Participant] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        self.fail_bulk = False
        self.fail_mark_sent = False
        self.store_calls = 0

    def add(self, *, event_id: str = EVENT_ID, name: str = "P", email: Optional[str] = None, token: Optional[str] = None, **flags) -> Participant:
        with self._lock:
            pid = self._next_id
            self._next_id += 1
            p = Participant(
                participant_id=pid,
                event_id=event_id,
                name=name,
                email=email or f"p{pid}@example.com",
                phone=f"08{pid:04d}",
                token=token or make_token(pid),
                created_at=datetime(2026, 1, 1, 8, 0, 0),
                **flags,
            )
            self._rows[pid] = p
            return p

    def all(self) -> list[Participant]:
        return sorted(self._rows.values(), key=lambda p: p.participant_id)

    def bulk_create(self, participants: Sequence[NewParticipant]) -> int:
        with self._lock:
            if self.fail_bulk:
                raise PersistenceError("Database operation failed")
            taken = {p.token for p in self._rows.values()}
            staged: list[Participant] = []
            next_id = self._next_id
            for p in participants:
                if p.token in taken:
                    raise PersistenceError("Duplicate token")
                taken.add(p.token)
                staged.append(
                    Participant(
                        participant_id=next_id,
                        event_id=p.event_id,
                        name=p.name,
                        email=p.email,
                        phone=p.phone,
                        token=p.token,
                        created_at=datetime(2026, 1, 1, 8, 0, 0),
                    )
                )
                next_id += 1
            for row in staged:
                self._rows[row.participant_id] = row
            self._next_id = next_id
            return len(staged)

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        return self._rows.get(int(participant_id))

    def get_by_token(self, token: str) -> Optional[Participant]:
        self.store_calls += 1
        return next((p for p in self._rows.values() if p.token == token), None)

    def list_by_event(self, event_id: str) -> Sequence[Participant]:
        rows = [p for p in self._rows.values() if p.event_id == event_id]
        return sorted(rows, key=lambda p: p.participant_id, reverse=True)

    def list_pending_dispatch(self, event_id: str) -> Sequence[Participant]:
        return [p for p in self.all() if p.event_id == event_id and not p.qr_sent]

    def count_by_event(self, event_id: str) -> int:
        return sum(1 for p in self._rows.values() if p.event_id == event_id)

    def count_checked_in_by_event(self, event_id: str) -> int:
        return sum(1 for p in self._rows.values() if p.event_id == event_id and p.checked_in)

    def list_recent_checkins(self, event_id: str, limit: int) -> Sequence[Participant]:
        rows = [p for p in self._rows.values() if p.event_id == event_id and p.checked_in]
        rows.sort(key=lambda p: p.checked_in_at, reverse=True)
        return rows[:limit]

    def mark_checked_in(self, token: str, *, at: datetime, event_id: Optional[str] = None) -> bool:
        self.store_calls += 1
        with self._lock:
            for pid, p in self._rows.items():
                if p.token == token and not p.checked_in and (event_id is None or p.event_id == event_id):
                    self._rows[pid] = replace(p, checked_in=True, checked_in_at=at)
                    return True
            return False

    def mark_sent(self, participant_id: int, *, at: datetime) -> bool:
        with self._lock:
            if self.fail_mark_sent:
                raise PersistenceError("Database operation failed")
            p = self._rows.get(int(participant_id))
            if not p or p.qr_sent:
                return False
            self._rows[p.participant_id] = replace(p, qr_sent=True, qr_sent_at=at)
            return True

    def delete_by_event(self, event_id: str) -> int:
        with self._lock:
            doomed = [pid for pid, p in self._rows.items() if p.event_id == event_id]
            for pid in doomed:
                del self._rows[pid]
            return len(doomed)


class FakeImages:
    def __init__(self, fail_for: Sequence[str] = ()):
        self.fail_for = set(fail_for)
        self.calls: list[tuple[str, int]] = []

    def generate(self, data: str, size: int = 256) -> bytes:
        self.calls.append((data, size))
        if data in self.fail_for:
            raise ValueError("encoder exploded")
        return b"PNG:" + data.encode()


class FakeSender:
    def __init__(self, fail_for: Sequence[str] = ()):
        self.fail_for = set(fail_for)
        self.attempts: list[Notification] = []

    @property
    def delivered(self) -> list[Notification]:
        return [n for n in self.attempts if n.to not in self.fail_for]

    def send(self, notification: Notification) -> None:
        self.attempts.append(notification)
        if notification.to in self.fail_for:
            raise DeliveryError(notification.to, "mailbox unavailable")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 30, 0)


@pytest.fixture
def event() -> Event:
    return Event(
        event_id=EVENT_ID,
        organizer_id=ORGANIZER_ID,
        name="PyCon Jakarta",
        slug="pycon-jakarta",
        event_date=datetime(2026, 3, 14, 9, 0, 0),
        venue="Jakarta Convention Center",
        scanner_pin="0427",
        participant_count=100,
    )


@pytest.fixture
def other_event() -> Event:
    return Event(
        event_id=OTHER_EVENT_ID,
        organizer_id=OTHER_ORGANIZER_ID,
        name="Other Meetup",
        slug="other-meetup",
        event_date=datetime(2026, 4, 1, 18, 0, 0),
        venue="Bandung",
        scanner_pin="9999",
    )


@pytest.fixture
def events_repo(event, other_event) -> InMemoryEvents:
    return InMemoryEvents([event, other_event])


@pytest.fixture
def participants_repo() -> InMemoryParticipants:
    return InMemoryParticipants()


@pytest.fixture
def images() -> FakeImages:
    return FakeImages()


@pytest.fixture
def sender() -> FakeSender:
    return FakeSender()


@pytest.fixture
def container(participants_repo, events_repo, images, sender):
    return wire_services(
        participants_repo=participants_repo,
        events_repo=events_repo,
        images=images,
        sender=sender,
    )
