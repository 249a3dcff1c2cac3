"""In-memory log store used for tests and local runs without a database."""
from __future__ import annotations

from datetime import date
from typing import Iterable, List

from domain.notification_log import (
    Channel,
    DeliveryStatus,
    EventType,
    NotificationLogRow,
    NotificationTemplate,
)
from .repository import NotificationLogRepository


class InMemoryNotificationLogRepository(NotificationLogRepository):
    def __init__(self, rows: Iterable[NotificationLogRow] = ()):
        self._rows: List[NotificationLogRow] = list(rows)

    def list_summary_rows(self, start: date, end: date) -> List[NotificationLogRow]:
        return [
            row
            for row in self._rows
            if EventType.parse(row.event_type) is not None
            and Channel.parse(row.notification_type) is not None
            and row.created_date is not None
            and start <= row.created_date <= end
        ]

    def list_template_rows(self, since: date, until: date) -> List[NotificationLogRow]:
        return [
            row
            for row in self._rows
            if DeliveryStatus.parse(row.status) is DeliveryStatus.SUCCESS
            and NotificationTemplate.parse(row.template) is not None
            and row.created_date is not None
            and since <= row.created_date < until
        ]

    def add_rows(self, rows: Iterable[NotificationLogRow]) -> int:
        new_rows = list(rows)
        self._rows.extend(new_rows)
        return len(new_rows)
