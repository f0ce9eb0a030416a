from __future__ import annotations

import threading
from datetime import datetime, timedelta

import pytest

from src.eventcheck_system.eventcheck_system.core.enums import CheckInOutcome, ErrorKind
from src.eventcheck_system.eventcheck_system.core.exceptions import AuthorizationError, NotFoundError


@pytest.mark.parametrize(
    "token",
    ["", "   ", "abc", "0" * 31, "0" * 33, "A" * 32, "z" * 32, "0123456789abcdef0123456789abcde!"],
)
def test_malformed_token_is_rejected_without_touching_store(container, participants_repo, token):
    result = container.checkin_service.check_in(token)

    assert result.outcome == CheckInOutcome.INVALID_FORMAT
    assert not result.success
    assert result.error.kind == ErrorKind.FORMAT
    assert participants_repo.store_calls == 0


def test_unknown_token_is_not_found(container):
    result = container.checkin_service.check_in("e" * 32)

    assert result.outcome == CheckInOutcome.NOT_FOUND
    assert result.error.kind == ErrorKind.NOT_FOUND
    assert result.participant is None


def test_first_scan_checks_in_and_repeat_reports_original_time(container, participants_repo, event, fixed_now):
    p = participants_repo.add(event_id=event.event_id, name="Ada")

    first = container.checkin_service.check_in(p.token, now=fixed_now)

    assert first.outcome == CheckInOutcome.CHECKED_IN
    assert first.success
    assert first.error is None
    assert first.message == "Check-in success! Welcome Ada"
    assert first.checked_in_at == fixed_now
    assert participants_repo.get_by_id(p.participant_id).checked_in

    later = fixed_now + timedelta(minutes=5)
    second = container.checkin_service.check_in(p.token, now=later)

    assert second.outcome == CheckInOutcome.ALREADY_CHECKED_IN
    assert second.already_checked_in
    assert second.checked_in_at == fixed_now
    assert second.error.kind == ErrorKind.ALREADY_IN_STATE
    assert second.error.checked_in_at == fixed_now
    assert participants_repo.get_by_id(p.participant_id).checked_in_at == fixed_now


def test_surrounding_whitespace_is_ignored(container, participants_repo, event):
    p = participants_repo.add(event_id=event.event_id)

    assert container.checkin_service.check_in(f"  {p.token}\n").success


def test_station_only_admits_its_own_event(container, participants_repo, event, other_event):
    p = participants_repo.add(event_id=other_event.event_id)

    result = container.checkin_service.check_in(p.token, event_id=event.event_id)

    assert result.outcome == CheckInOutcome.NOT_FOUND
    assert participants_repo.get_by_id(p.participant_id).checked_in is False


def test_checked_in_participant_stays_checked_in_across_other_events_scan(container, participants_repo, event, other_event):
    p = participants_repo.add(event_id=event.event_id)
    container.checkin_service.check_in(p.token, event_id=event.event_id)

    result = container.checkin_service.check_in(p.token, event_id=other_event.event_id)

    assert result.outcome == CheckInOutcome.NOT_FOUND
    assert participants_repo.get_by_id(p.participant_id).checked_in


def test_concurrent_scans_produce_exactly_one_success(container, participants_repo, event):
    p = participants_repo.add(event_id=event.event_id)
    workers = 16
    barrier = threading.Barrier(workers)
    results = []
    lock = threading.Lock()

    def scan():
        barrier.wait()
        r = container.checkin_service.check_in(p.token)
        with lock:
            results.append(r)

    threads = [threading.Thread(target=scan) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    outcomes = [r.outcome for r in results]
    assert outcomes.count(CheckInOutcome.CHECKED_IN) == 1
    assert outcomes.count(CheckInOutcome.ALREADY_CHECKED_IN) == workers - 1
    stamps = {r.checked_in_at for r in results}
    assert len(stamps) == 1


def test_verify_pin(container, event):
    ok = container.checkin_service.verify_pin(event.slug, "0427")
    assert ok.valid
    assert ok.event_id == event.event_id
    assert ok.event_name == "PyCon Jakarta"

    bad = container.checkin_service.verify_pin(event.slug, "0000")
    assert not bad.valid
    assert bad.message == "Invalid scanner PIN"

    missing = container.checkin_service.verify_pin("nope", "0427")
    assert not missing.valid
    assert missing.message == "Event not found"


def test_pin_of_another_event_is_rejected(container, event, other_event):
    assert not container.checkin_service.verify_pin(event.slug, other_event.scanner_pin).valid


def test_authorize_station_raises(container, event):
    assert container.checkin_service.authorize_station(event.slug, " 0427 ").event_id == event.event_id

    with pytest.raises(AuthorizationError):
        container.checkin_service.authorize_station(event.slug, "")
    with pytest.raises(NotFoundError):
        container.checkin_service.authorize_station("nope", "0427")


def test_scan_page(container, event):
    page = container.checkin_service.get_scan_page(event.slug)

    assert page.event_name == "PyCon Jakarta"
    assert page.venue == "Jakarta Convention Center"
    assert page.event_date == datetime(2026, 3, 14, 9, 0, 0)

    with pytest.raises(NotFoundError):
        container.checkin_service.get_scan_page("nope")
