from __future__ import annotations

import io

import pytest

from src.eventcheck_system.eventcheck_system.main import create_app


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def organizer_client(client, event):
    with client.session_transaction() as sess:
        sess["organizer_id"] = event.organizer_id
    return client


@pytest.fixture
def station_client(client, event):
    resp = client.post(f"/api/checkin/{event.slug}/verify-pin", json={"scanner_pin": event.scanner_pin})
    assert resp.status_code == 200
    return client


def _csv(text: str):
    return {"file": (io.BytesIO(text.encode("utf-8")), "participants.csv")}


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_upload_requires_login(client, event):
    resp = client.post(f"/api/events/{event.event_id}/participants/upload", data=_csv("name,email,phone\n"))

    assert resp.status_code == 401


def test_upload_reports_counts_and_row_errors(organizer_client, participants_repo, event):
    resp = organizer_client.post(
        f"/api/events/{event.event_id}/participants/upload",
        data=_csv("name,email,phone\nAda,ada@x.com,0811\n,missing,\n"),
        content_type="multipart/form-data",
    )

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["success"] == 1
    assert data["failed"] == 1
    assert {e["row"] for e in data["row_errors"]} == {2}
    assert len(participants_repo.all()) == 1


def test_upload_bad_header_maps_to_400(organizer_client, event):
    resp = organizer_client.post(
        f"/api/events/{event.event_id}/participants/upload",
        data=_csv("name,mail,phone\nAda,ada@x.com,0811\n"),
        content_type="multipart/form-data",
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "FORMAT"


def test_upload_without_file(organizer_client, event):
    resp = organizer_client.post(f"/api/events/{event.event_id}/participants/upload", data={})

    assert resp.status_code == 400


def test_foreign_event_is_forbidden(organizer_client, other_event):
    resp = organizer_client.get(f"/api/events/{other_event.event_id}/participants")

    assert resp.status_code == 403
    assert resp.get_json()["error"] == "AUTHORIZATION"


def test_unknown_event_is_404(organizer_client):
    assert organizer_client.get("/api/events/nope/participants").status_code == 404


def test_send_and_resend(organizer_client, participants_repo, sender, event):
    p = participants_repo.add(event_id=event.event_id, email="ada@x.com")

    resp = organizer_client.post(f"/api/events/{event.event_id}/qr/send")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["outcome"] == "ALL_SENT"

    sender.fail_for = {"ada@x.com"}
    resp = organizer_client.post(f"/api/events/{event.event_id}/participants/{p.participant_id}/qr/resend")
    assert resp.status_code == 502
    assert resp.get_json()["data"]["failed_emails"] == ["ada@x.com"]


def test_test_email_requires_address(organizer_client):
    assert organizer_client.post("/api/email/test", json={}).status_code == 400
    assert organizer_client.post("/api/email/test", json={"email": "me@x.com"}).status_code == 200


def test_scan_page_is_public(client, event):
    resp = client.get(f"/api/checkin/{event.slug}")

    assert resp.status_code == 200
    assert resp.get_json()["event_name"] == "PyCon Jakarta"


def test_wrong_pin_is_401(client, event):
    resp = client.post(f"/api/checkin/{event.slug}/verify-pin", json={"scanner_pin": "0000"})

    assert resp.status_code == 401
    assert resp.get_json()["valid"] is False


def test_checkin_requires_verified_station(client, participants_repo, event):
    p = participants_repo.add(event_id=event.event_id)

    resp = client.post(f"/api/checkin/{event.slug}", json={"qr_token": p.token})

    assert resp.status_code == 401
    assert participants_repo.get_by_id(p.participant_id).checked_in is False


def test_checkin_flow(station_client, participants_repo, event):
    p = participants_repo.add(event_id=event.event_id, name="Ada")

    first = station_client.post(f"/api/checkin/{event.slug}", json={"qr_token": p.token}).get_json()
    second = station_client.post(f"/api/checkin/{event.slug}", json={"qr_token": p.token}).get_json()
    bad = station_client.post(f"/api/checkin/{event.slug}", json={"qr_token": "nope"}).get_json()

    assert first["outcome"] == "CHECKED_IN"
    assert first["success"] is True
    assert second["outcome"] == "ALREADY_CHECKED_IN"
    assert second["checked_in_at"] == first["checked_in_at"]
    assert bad["outcome"] == "INVALID_FORMAT"


def test_station_of_one_event_cannot_scan_another(station_client, participants_repo, other_event):
    p = participants_repo.add(event_id=other_event.event_id)

    resp = station_client.post(f"/api/checkin/{other_event.slug}", json={"qr_token": p.token})

    assert resp.status_code == 401


def test_stats_endpoint(station_client, participants_repo, event):
    participants_repo.add(event_id=event.event_id)

    resp = station_client.get(f"/api/checkin/{event.slug}/stats")

    assert resp.status_code == 200
    assert resp.get_json()["data"]["total_participants"] == 1
