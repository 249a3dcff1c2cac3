"""Notification log rows and the closed vocabularies they are tagged with."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional, Union


class ClosedEnum(str, Enum):
    """String enum whose unknown values parse to ``None`` instead of raising."""

    @classmethod
    def parse(cls, value: Any) -> Optional["ClosedEnum"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class EventType(ClosedEnum):
    """Business reason a notification was sent (a.k.a. trigger)."""

    PAYMENT_REMINDER = "payment-reminder-job"
    SESSION_REMINDER = "session-reminder"

    @property
    def breakdown_key(self) -> str:
        return _BREAKDOWN_KEYS[self]


_BREAKDOWN_KEYS = {
    EventType.PAYMENT_REMINDER: "paymentReminder",
    EventType.SESSION_REMINDER: "sessionReminder",
}


class Channel(ClosedEnum):
    PUSH = "push"
    WHATSAPP = "whatsapp"


class DeliveryStatus(ClosedEnum):
    SUCCESS = "success"


class NotificationTemplate(ClosedEnum):
    """Message templates tracked for delivery stats."""

    LATE_FEE_PAYMENT_REMINDER_V3 = "late_fee_payment_reminder_v3"
    LATE_FEE_PAYMENT_REMINDER_V4 = "late_fee_payment_reminder_v4"
    MONTHLY_OVERDUE_PAYMENT_REMINDER_V2 = "monthly_overdue_payment_reminder_v2"
    LONGTERM_OVERDUE_PAYMENT_REMINDER_V3 = "longterm_overdue_payment_reminder_v3"
    MONTHLY_PAYMENT_REMINDER_V2 = "monthly_payment_reminder_v2"
    LONGTERM_PAYMENT_REMINDER_V2 = "longterm_payment_reminder_v2"


Timestamp = Union[datetime, date]


@dataclass(frozen=True)
class NotificationLogRow:
    """One send attempt as stored in ``notification.logs``.

    Fields stay raw strings; the aggregation filters decide membership by
    parsing them against the closed enums above.
    """

    event_type: Optional[str] = None
    notification_type: Optional[str] = None
    template: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[Timestamp] = None

    @property
    def created_date(self) -> Optional[date]:
        value = self.created_at
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NotificationLogRow":
        """Build a row from a store record (snake_case) or a JSON object (camelCase)."""

        def pick(snake: str, camel: str) -> Any:
            value = data.get(snake)
            return data.get(camel) if value is None else value

        return cls(
            event_type=pick("event_type", "eventType"),
            notification_type=pick("notification_type", "notificationType"),
            template=data.get("template"),
            status=data.get("status"),
            created_at=_coerce_timestamp(pick("created_at", "createdAt")),
        )


def _coerce_timestamp(value: Any) -> Optional[Timestamp]:
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None
