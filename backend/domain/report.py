"""Immutable aggregation results served to the dashboard."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Tuple

from .notification_log import EventType


@dataclass(frozen=True)
class TriggerCount:
    trigger: str
    count: int

    def to_payload(self) -> Dict[str, Any]:
        return {"trigger": self.trigger, "count": self.count}


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def to_payload(self) -> Dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


@dataclass(frozen=True)
class RangeSummary:
    """Per-trigger totals plus the push/whatsapp split of each trigger."""

    date_range: DateRange
    summary: Tuple[TriggerCount, ...]
    breakdown: Tuple[Tuple[EventType, Tuple[TriggerCount, ...]], ...]

    def breakdown_for(self, event_type: EventType) -> Tuple[TriggerCount, ...]:
        for key, counts in self.breakdown:
            if key is event_type:
                return counts
        return ()

    def to_payload(self) -> Dict[str, Any]:
        return {
            "dateRange": self.date_range.to_payload(),
            "summary": [item.to_payload() for item in self.summary],
            "breakdown": {
                event_type.breakdown_key: [item.to_payload() for item in counts]
                for event_type, counts in self.breakdown
            },
        }


@dataclass(frozen=True)
class DailyTemplateCount:
    sent_date: date
    template: str
    delivered_count: int

    def to_payload(self) -> Dict[str, Any]:
        return {
            "sent_date": self.sent_date.isoformat(),
            "template": self.template,
            "delivered_count": self.delivered_count,
        }


@dataclass(frozen=True)
class TodayTemplateCount:
    template: str
    delivered_count: int

    def to_payload(self) -> Dict[str, Any]:
        return {"template": self.template, "delivered_count": self.delivered_count}


def payload_list(items) -> List[Dict[str, Any]]:
    return [item.to_payload() for item in items]
