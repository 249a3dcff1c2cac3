"""Abstract repository interface for the notification log store."""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List

from domain.notification_log import NotificationLogRow


class NotificationLogRepository(ABC):
    """Unified gateway so memory store / SQL share the same API.

    Implementations raise ``application.errors.RowSourceUnavailable`` when the
    store cannot be reached.
    """

    @abstractmethod
    def list_summary_rows(self, start: date, end: date) -> List[NotificationLogRow]:
        """Rows with a known trigger and channel sent between ``start`` and ``end`` inclusive."""
        raise NotImplementedError

    @abstractmethod
    def list_template_rows(self, since: date, until: date) -> List[NotificationLogRow]:
        """Successful rows of tracked templates sent on ``since <= day < until``."""
        raise NotImplementedError

    @abstractmethod
    def add_rows(self, rows: Iterable[NotificationLogRow]) -> int:
        raise NotImplementedError
