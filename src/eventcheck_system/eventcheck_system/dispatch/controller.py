from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response, organizer_required
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events/<event_id>/qr/send", methods=["POST"], endpoint="qr_send")
    @organizer_required
    def qr_send(event_id: str, *, organizer_id: int):
        try:
            result = container.dispatch_service.send_pending(organizer_id=organizer_id, event_id=event_id)
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "data": result.to_dict()}), 200

    @app.route(
        "/api/events/<event_id>/participants/<int:participant_id>/qr/resend",
        methods=["POST"],
        endpoint="qr_resend",
    )
    @organizer_required
    def qr_resend(event_id: str, participant_id: int, *, organizer_id: int):
        try:
            result = container.dispatch_service.resend(
                organizer_id=organizer_id,
                event_id=event_id,
                participant_id=participant_id,
            )
        except DomainError as e:
            return error_response(e)

        status = 200 if result.sent else 502
        return jsonify({"success": bool(result.sent), "data": result.to_dict()}), status

    @app.route("/api/email/test", methods=["POST"], endpoint="email_test")
    @organizer_required
    def email_test(*, organizer_id: int):
        data = request.get_json(silent=True) or {}
        to_email = str(data.get("email") or "").strip()

        try:
            container.dispatch_service.send_test_email(to_email=to_email, recipient_name=str(data.get("name") or ""))
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "message": f"Test email sent to {to_email}"}), 200
