from __future__ import annotations

import hmac
import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import CheckInOutcome
from ..core.exceptions import AuthorizationError, NotFoundError
from ..events.model import Event
from ..events.repository import EventRepository
from ..events.service import require_event_by_slug
from ..participants.repository import ParticipantRepository
from ..participants.tokens import is_well_formed_token
from .model import CheckInResult, PinVerification, ScanPage

logger = logging.getLogger(__name__)


class CheckInService:
    """Door check-in: REGISTERED -> CHECKED_IN, exactly once per token.

    The transition is the store's conditional update, so concurrent scans of
    one token produce one CHECKED_IN and any number of ALREADY_CHECKED_IN.
    """

    def __init__(self, participants: ParticipantRepository, events: EventRepository):
        self._participants = participants
        self._events = events

    def authorize_station(self, event_slug: str, pin: str) -> Event:
        event = require_event_by_slug(self._events, event_slug)
        if not hmac.compare_digest(str(pin or "").strip().encode(), event.scanner_pin.encode()):
            raise AuthorizationError("Invalid scanner PIN")
        return event

    def verify_pin(self, event_slug: str, pin: str) -> PinVerification:
        try:
            event = self.authorize_station(event_slug, pin)
        except NotFoundError:
            return PinVerification(valid=False, message="Event not found")
        except AuthorizationError:
            return PinVerification(valid=False, message="Invalid scanner PIN")
        return PinVerification(
            valid=True,
            message="Valid PIN, scanner authorized",
            event_id=event.event_id,
            event_name=event.name,
        )

    def check_in(self, token: str, *, event_id: Optional[str] = None, now: Optional[datetime] = None) -> CheckInResult:
        token = (token or "").strip()
        if not is_well_formed_token(token):
            return CheckInResult(outcome=CheckInOutcome.INVALID_FORMAT, message="Invalid QR code (wrong format)")

        now = now or now_local()
        if self._participants.mark_checked_in(token, at=now, event_id=event_id):
            participant = self._participants.get_by_token(token)
            logger.info("Participant %s checked in at %s", participant.participant_id if participant else "?", now)
            return CheckInResult(
                outcome=CheckInOutcome.CHECKED_IN,
                message=f"Check-in success! Welcome {participant.name}" if participant else "Check-in success!",
                participant=participant,
                checked_in_at=(participant.checked_in_at if participant else None) or now,
            )

        participant = self._participants.get_by_token(token)
        if not participant or (event_id is not None and participant.event_id != event_id):
            return CheckInResult(
                outcome=CheckInOutcome.NOT_FOUND,
                message="QR code not found, make sure the QR code is correct",
            )

        return CheckInResult(
            outcome=CheckInOutcome.ALREADY_CHECKED_IN,
            message="Participant has already checked in",
            participant=participant,
            checked_in_at=participant.checked_in_at,
        )

    def get_scan_page(self, event_slug: str) -> ScanPage:
        event = require_event_by_slug(self._events, event_slug)
        return ScanPage(event_slug=event.slug, event_name=event.name, event_date=event.event_date, venue=event.venue)
