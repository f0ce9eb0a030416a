"""HTML bodies for credential notifications (Jinja2, autoescaped)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from jinja2 import Environment, select_autoescape

from ..common.datetime_utils import format_event_date
from ..events.model import Event
from ..participants.model import Participant

_env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))

QR_EMAIL_TEMPLATE = _env.from_string(
    """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Your Event QR Code</title>
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background: #4f46e5; color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0; }
        .content { background: #f9f9f9; padding: 30px; border: 1px solid #ddd; }
        .qr-container { text-align: center; margin: 30px 0; padding: 20px; background: white; border-radius: 10px; }
        .qr-code { max-width: 256px; height: auto; margin: 20px auto; display: block; }
        .detail-label { font-weight: bold; color: #4f46e5; }
        .footer { text-align: center; color: #666; font-size: 12px; margin-top: 30px; }
    </style>
</head>
<body>
    <div class="header">
        <h1>Your Event QR Code</h1>
        <p>Welcome to {{ event_name }}</p>
    </div>
    <div class="content">
        <p>Hi <strong>{{ participant_name }}</strong>,</p>
        <p>Thank you for registering! Here is your unique QR code for check-in at the event.</p>
        <div class="qr-container">
            <img src="{{ image_src }}" alt="QR Code" class="qr-code">
            <p>Please show this QR code at the registration desk.</p>
        </div>
        <p><span class="detail-label">Event:</span> {{ event_name }}</p>
        <p><span class="detail-label">Date &amp; Time:</span> {{ event_date }}</p>
        <p><span class="detail-label">Venue:</span> {{ venue }}</p>
        <p>This QR code is unique to you, do not share it with others.</p>
        <p>We look forward to seeing you at the event!</p>
    </div>
    <div class="footer">
        <p>This is an automated email from EventCheck.</p>
        <p>&copy; {{ year }} EventCheck.</p>
    </div>
</body>
</html>
"""
)

TEST_EMAIL_TEMPLATE = _env.from_string(
    """<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif;">
    <h2>EventCheck test email</h2>
    <p>Hi {{ recipient_name }},</p>
    <p>If you can read this, outgoing email is configured correctly.</p>
</body>
</html>
"""
)


def build_qr_email(
    participant: Participant,
    event: Event,
    *,
    now: Optional[datetime] = None,
) -> str:
    """Body for a credential email. The QR image travels as inline MIME part `cid:qrcode`."""

    return QR_EMAIL_TEMPLATE.render(
        participant_name=participant.name,
        event_name=event.name,
        event_date=format_event_date(event.event_date),
        venue=event.venue,
        image_src="cid:qrcode",
        year=(now or datetime.now()).year,
    )


def build_test_email(recipient_name: str) -> str:
    return TEST_EMAIL_TEMPLATE.render(recipient_name=recipient_name)
