from __future__ import annotations

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.image import MIMEImage
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from ..core.constants import DEFAULT_DELIVERY_TIMEOUT_SECONDS
from ..core.exceptions import DeliveryError
from .model import Notification
from .sender import NotificationSender

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SMTPConfig:
    host: str
    port: int
    username: str
    password: str
    from_email: str
    from_name: str = "EventCheck"
    use_tls: bool = True
    timeout: float = DEFAULT_DELIVERY_TIMEOUT_SECONDS


def build_message(notification: Notification, *, sender: str) -> MIMEMultipart:
    """multipart/related: HTML first, then the QR PNG as inline part <qrcode>."""

    message = MIMEMultipart("related")
    message["Subject"] = notification.subject
    message["From"] = sender
    message["To"] = notification.to

    message.attach(MIMEText(notification.html_body, "html", "utf-8"))

    if notification.image_png:
        image = MIMEImage(notification.image_png, _subtype="png")
        image.add_header("Content-ID", "<qrcode>")
        image.add_header("Content-Disposition", "inline", filename="qrcode.png")
        message.attach(image)

    return message


class SMTPNotificationSender(NotificationSender):
    """One SMTP session per message, bounded by `config.timeout`."""

    def __init__(self, config: SMTPConfig):
        self._config = config

    def send(self, notification: Notification) -> None:
        cfg = self._config
        try:
            message = build_message(notification, sender=formataddr((cfg.from_name, cfg.from_email)))
            with smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout) as server:
                if cfg.use_tls:
                    server.starttls(context=ssl.create_default_context())
                if cfg.username:
                    server.login(cfg.username, cfg.password)
                server.sendmail(cfg.from_email, [notification.to], message.as_string())
        except (smtplib.SMTPException, OSError, ValueError) as exc:
            # UnicodeEncodeError (a ValueError) for non-ASCII recipients without SMTPUTF8.
            raise DeliveryError(notification.to, exc) from exc

        logger.debug("Email sent to %s", notification.to)
