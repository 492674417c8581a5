"""Port interface for user-visible alerts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class NotificationKind(Enum):
    INFO = "info"
    ERROR = "error"


class NotificationSink(ABC):
    """Fire-and-forget alerts. Callers never await or branch on the outcome."""

    @abstractmethod
    def notify(self, kind: NotificationKind, title: str, body: str) -> None:
        ...
