"""Base interface for notification providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from hi_notify.credentials import MailSecret


@dataclass(frozen=True)
class NotificationContext:
    """A single outbound notification."""

    recipient: str
    subject: str
    body: str
    attachments: tuple[Path, ...] = field(default_factory=tuple)
    log_path: Optional[Path] = None


class NotificationProvider(ABC):
    """Abstract base class for a notification delivery mechanism."""

    @abstractmethod
    def send(self, context: NotificationContext, secret: MailSecret) -> None:
        """Deliver the notification; raise DeliveryError on failure."""
        pass
