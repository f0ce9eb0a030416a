from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response, organizer_required
from ..container import Container
from ..core.exceptions import DomainError
from .csv_parser import decode_upload


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events/<event_id>/participants/upload", methods=["POST"], endpoint="participants_upload")
    @organizer_required
    def participants_upload(event_id: str, *, organizer_id: int):
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return jsonify({"success": False, "message": "CSV file is required (field 'file')"}), 400

        try:
            result = container.participant_service.upload_participants(
                organizer_id=organizer_id,
                event_id=event_id,
                stream=decode_upload(upload.read()),
            )
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "data": result.to_dict()}), 200

    @app.route("/api/events/<event_id>/participants", methods=["GET"], endpoint="participants_list")
    @organizer_required
    def participants_list(event_id: str, *, organizer_id: int):
        try:
            rows = container.participant_service.list_participants(organizer_id=organizer_id, event_id=event_id)
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "data": [p.to_dict() for p in rows]}), 200
