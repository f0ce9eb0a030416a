from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.responses import error_response
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    def station_required(view):
        """Only stations that passed verify-pin for this event slug may scan."""

        @wraps(view)
        def wrapper(event_slug: str, *args, **kwargs):
            station = session.get("station") or {}
            if station.get("slug") != event_slug:
                return jsonify({"success": False, "message": "Scanner not authorized, verify PIN first"}), 401
            return view(event_slug, *args, station_event_id=station["event_id"], **kwargs)

        return wrapper

    @app.route("/api/checkin/<event_slug>", methods=["GET"], endpoint="checkin_scan_page")
    def checkin_scan_page(event_slug: str):
        try:
            page = container.checkin_service.get_scan_page(event_slug)
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "event_slug": page.event_slug,
                "event_name": page.event_name,
                "event_date": page.event_date.strftime("%A, %d %B %Y"),
                "venue": page.venue,
            }
        ), 200

    @app.route("/api/checkin/<event_slug>/verify-pin", methods=["POST"], endpoint="checkin_verify_pin")
    def checkin_verify_pin(event_slug: str):
        data = request.get_json(silent=True) or {}
        pin = str(data.get("scanner_pin", "")).strip()
        if not pin:
            return jsonify({"valid": False, "message": "scanner_pin is required"}), 400

        result = container.checkin_service.verify_pin(event_slug, pin)
        if not result.valid:
            session.pop("station", None)
            return jsonify(result.to_dict()), 401

        session["station"] = {"slug": event_slug, "event_id": result.event_id}
        return jsonify(result.to_dict()), 200

    @app.route("/api/checkin/<event_slug>", methods=["POST"], endpoint="checkin_submit")
    @station_required
    def checkin_submit(event_slug: str, *, station_event_id: str):
        data = request.get_json(silent=True) or {}
        token = str(data.get("qr_token", ""))

        result = container.checkin_service.check_in(token, event_id=station_event_id)
        # Every outcome is a normal answer for the scanner UI.
        return jsonify(result.to_dict()), 200

    @app.route("/api/checkin/<event_slug>/stats", methods=["GET"], endpoint="checkin_stats")
    @station_required
    def checkin_stats(event_slug: str, *, station_event_id: str):
        try:
            stats = container.stats_service.get_event_stats(event_slug)
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "data": stats.to_dict()}), 200
