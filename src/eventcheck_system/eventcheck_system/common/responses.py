from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.enums import ErrorKind
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.FORMAT: 400,
    ErrorKind.EMPTY_INPUT: 400,
    ErrorKind.ROW_VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.ALREADY_IN_STATE: 200,
    ErrorKind.DELIVERY: 502,
    ErrorKind.PERSISTENCE: 500,
}


def error_response(exc: DomainError):
    status = STATUS_BY_KIND.get(exc.kind, 400)
    if status >= 500:
        logger.error("%s: %s", exc.kind.value, exc)
    return jsonify({"success": False, "error": exc.kind.value, "message": str(exc)}), status


def organizer_required(view):
    """Organizer identity comes from the upstream auth layer as session['organizer_id']."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "organizer_id" not in session:
            return jsonify({"success": False, "message": "Login required"}), 401
        return view(*args, organizer_id=int(session["organizer_id"]), **kwargs)

    return wrapper
