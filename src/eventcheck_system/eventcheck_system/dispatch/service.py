from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import QR_IMAGE_SIZE
from ..core.exceptions import AuthorizationError, DeliveryError, NotFoundError, PersistenceError
from ..events.model import Event
from ..events.repository import EventRepository
from ..events.service import require_owned_event
from ..participants.model import Participant
from ..participants.repository import ParticipantRepository
from .model import DeliveryFailure, DispatchResult, Notification
from .qr_generator import ImageGenerator
from .sender import NotificationSender
from .templates import build_qr_email, build_test_email

logger = logging.getLogger(__name__)


class DispatchService:
    """Sends each participant their QR credential by email.

    A pass only looks at participants not yet marked sent, and marks a
    participant sent only after the sender confirmed delivery.
    """

    def __init__(
        self,
        participants: ParticipantRepository,
        events: EventRepository,
        images: ImageGenerator,
        sender: NotificationSender,
        *,
        image_size: int = QR_IMAGE_SIZE,
        clock: Callable[[], datetime] = now_local,
    ):
        self._participants = participants
        self._events = events
        self._images = images
        self._sender = sender
        self._image_size = int(image_size)
        self._clock = clock

    def send_pending(self, *, organizer_id: int, event_id: str) -> DispatchResult:
        event = require_owned_event(self._events, organizer_id=organizer_id, event_id=event_id)

        pending = list(self._participants.list_pending_dispatch(event_id))
        if not pending:
            logger.info("Event %s: every participant already received a QR code", event_id)
            return DispatchResult(total=0, sent=0, failed=0)

        sent = 0
        failures: list[DeliveryFailure] = []
        for participant in pending:
            try:
                self._deliver(participant, event, subject=f"Your QR Code for {event.name}")
            except DeliveryError as exc:
                logger.warning("Failed to send QR to %s (participant %d): %s", participant.email, participant.participant_id, exc.cause)
                failures.append(DeliveryFailure(participant.participant_id, participant.email, str(exc.cause)))
                continue

            self._mark_sent(participant)
            sent += 1
            logger.info("QR code sent to %s (%s)", participant.name, participant.email)

        return DispatchResult(total=len(pending), sent=sent, failed=len(failures), failures=failures)

    def resend(self, *, organizer_id: int, event_id: str, participant_id: int) -> DispatchResult:
        """Deliver again regardless of the sent flag; the first qr_sent_at is kept."""

        event = require_owned_event(self._events, organizer_id=organizer_id, event_id=event_id)

        participant = self._participants.get_by_id(int(participant_id))
        if not participant:
            raise NotFoundError("Participant", participant_id)
        if participant.event_id != event.event_id:
            raise AuthorizationError("Participant does not belong to this event")

        try:
            self._deliver(participant, event, subject=f"Your QR Code for {event.name} (Resent)")
        except DeliveryError as exc:
            logger.warning("Failed to resend QR to %s: %s", participant.email, exc.cause)
            failure = DeliveryFailure(participant.participant_id, participant.email, str(exc.cause))
            return DispatchResult(total=1, sent=0, failed=1, failures=[failure])

        if not participant.qr_sent:
            self._mark_sent(participant)
        logger.info("QR code resent to %s (%s)", participant.name, participant.email)
        return DispatchResult(total=1, sent=1, failed=0)

    def send_test_email(self, *, to_email: str, recipient_name: str = "") -> None:
        to_email = require_non_empty(to_email, "email")
        self._sender.send(
            Notification(
                to=to_email,
                subject="Test email from EventCheck",
                html_body=build_test_email(recipient_name or to_email),
            )
        )

    def _deliver(self, participant: Participant, event: Event, *, subject: str) -> None:
        try:
            image = self._images.generate(participant.token, self._image_size)
        except Exception as exc:
            # Image failures count against this recipient only.
            raise DeliveryError(participant.email, f"QR generation failed: {exc}") from exc

        notification = Notification(
            to=participant.email,
            subject=subject,
            html_body=build_qr_email(participant, event, now=self._clock()),
            image_png=image,
        )
        try:
            self._sender.send(notification)
        except DeliveryError:
            raise
        except Exception as exc:
            # Sender failures count against this recipient only.
            raise DeliveryError(participant.email, exc) from exc

    def _mark_sent(self, participant: Participant) -> None:
        try:
            self._participants.mark_sent(participant.participant_id, at=self._clock())
        except PersistenceError:
            # Delivered but not flagged: the next pass will offer it again.
            logger.exception("Failed to mark QR sent for participant %d", participant.participant_id)
