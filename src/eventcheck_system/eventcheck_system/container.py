from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .checkin.service import CheckInService
from .core.constants import DEFAULT_DELIVERY_TIMEOUT_SECONDS, QR_IMAGE_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .dispatch.qr_generator import ImageGenerator, QRCodeImageGenerator
from .dispatch.sender import NotificationSender
from .dispatch.service import DispatchService
from .dispatch.smtp_sender import SMTPConfig, SMTPNotificationSender
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .participants.mysql_participant_repository import MySQLParticipantRepository
from .participants.repository import ParticipantRepository
from .participants.rules.factory import RowRuleFactory
from .participants.service import ParticipantService
from .stats.service import StatsService


@dataclass(frozen=True)
class Container:
    participants_repo: ParticipantRepository
    events_repo: EventRepository

    participant_service: ParticipantService
    dispatch_service: DispatchService
    checkin_service: CheckInService
    stats_service: StatsService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    participants_repo: ParticipantRepository,
    events_repo: EventRepository,
    images: ImageGenerator,
    sender: NotificationSender,
    conn: Optional[DatabaseConnection] = None,
    image_size: int = QR_IMAGE_SIZE,
    first_failure_only: bool = False,
) -> Container:
    return Container(
        conn=conn,
        participants_repo=participants_repo,
        events_repo=events_repo,
        participant_service=ParticipantService(
            participants_repo,
            events_repo,
            rule_factory=RowRuleFactory(first_failure_only=first_failure_only),
        ),
        dispatch_service=DispatchService(participants_repo, events_repo, images, sender, image_size=image_size),
        checkin_service=CheckInService(participants_repo, events_repo),
        stats_service=StatsService(participants_repo, events_repo),
    )


def build_container(
    *,
    db_config: dict,
    smtp_config: dict,
    delivery_timeout: float = DEFAULT_DELIVERY_TIMEOUT_SECONDS,
    image_size: int = QR_IMAGE_SIZE,
    first_failure_only: bool = False,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    sender = SMTPNotificationSender(
        SMTPConfig(
            host=str(smtp_config["host"]),
            port=int(smtp_config.get("port", 587)),
            username=str(smtp_config.get("username", "")),
            password=str(smtp_config.get("password", "")),
            from_email=str(smtp_config["from_email"]),
            from_name=str(smtp_config.get("from_name", "EventCheck")),
            use_tls=bool(smtp_config.get("use_tls", True)),
            timeout=float(delivery_timeout),
        )
    )

    return wire_services(
        conn=conn,
        participants_repo=MySQLParticipantRepository(conn),
        events_repo=MySQLEventRepository(conn),
        images=QRCodeImageGenerator(),
        sender=sender,
        image_size=image_size,
        first_failure_only=first_failure_only,
    )
