"""Notification sink that writes alerts to the application log."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime

from neon_player.application.interfaces.notification_sink import NotificationKind, NotificationSink
from neon_player.domain.shared.datetime_utils import utcnow
from neon_player.domain.shared.messages import LogTemplates

logger = logging.getLogger("neon_player")


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    title: str
    body: str
    created_at: datetime = field(default_factory=utcnow)


class LoggingNotificationSink(NotificationSink):
    """Logs INFO notifications at INFO and ERROR notifications at ERROR.

    The most recent ``history_size`` notifications are kept for display.
    """

    def __init__(self, history_size: int = 20) -> None:
        self._history: deque[Notification] = deque(maxlen=history_size)

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    def notify(self, kind: NotificationKind, title: str, body: str) -> None:
        self._history.append(Notification(kind=kind, title=title, body=body))
        level = logging.ERROR if kind is NotificationKind.ERROR else logging.INFO
        logger.log(level, LogTemplates.NOTIFICATION, title, body)

    def clear(self) -> None:
        self._history.clear()
