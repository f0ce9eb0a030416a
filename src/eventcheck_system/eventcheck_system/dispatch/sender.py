from __future__ import annotations

from typing import Protocol

from .model import Notification


class NotificationSender(Protocol):
    def send(self, notification: Notification) -> None:
        """Deliver or raise DeliveryError carrying the recipient and the reason."""

        raise NotImplementedError
