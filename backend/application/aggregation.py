"""Row filters and reductions behind the notification dashboard.

Everything here is a pure function of its arguments: rows come in, an
immutable result comes out. Counters live in local accumulators only.
"""
from __future__ import annotations

from collections import Counter
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from domain.notification_log import (
    Channel,
    DeliveryStatus,
    EventType,
    NotificationLogRow,
    NotificationTemplate,
)
from domain.report import (
    DailyTemplateCount,
    DateRange,
    RangeSummary,
    TodayTemplateCount,
    TriggerCount,
)

DAILY_WINDOW_DAYS = 7


class AggregationKind(str, Enum):
    RANGE_SUMMARY = "range-summary"
    DAILY_TEMPLATE = "daily-template"
    TODAY_TEMPLATE = "today-template"


# Row filter ---------------------------------------------------------------
def is_summary_row(row: NotificationLogRow, start: date, end: date) -> bool:
    if EventType.parse(row.event_type) is None:
        return False
    if Channel.parse(row.notification_type) is None:
        return False
    sent_on = row.created_date
    return sent_on is not None and start <= sent_on <= end


def is_delivered_template_row(row: NotificationLogRow) -> bool:
    return (
        DeliveryStatus.parse(row.status) is DeliveryStatus.SUCCESS
        and NotificationTemplate.parse(row.template) is not None
    )


def daily_window(today: date) -> Tuple[date, date]:
    """Return ``(since, until)`` with ``until`` exclusive: the 7 days before today."""
    return today - timedelta(days=DAILY_WINDOW_DAYS), today


def is_daily_template_row(row: NotificationLogRow, today: date) -> bool:
    if not is_delivered_template_row(row):
        return False
    sent_on = row.created_date
    since, until = daily_window(today)
    return sent_on is not None and since <= sent_on < until


def is_today_template_row(row: NotificationLogRow, today: date) -> bool:
    return is_delivered_template_row(row) and row.created_date == today


def row_matches(
    row: NotificationLogRow,
    kind: AggregationKind,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> bool:
    """Single entry point over the per-aggregation predicates."""
    if kind is AggregationKind.RANGE_SUMMARY:
        if start is None or end is None:
            raise ValueError("range summary filtering needs both start and end")
        return is_summary_row(row, start, end)
    if today is None:
        raise ValueError(f"{kind.value} filtering needs today's date")
    if kind is AggregationKind.DAILY_TEMPLATE:
        return is_daily_template_row(row, today)
    return is_today_template_row(row, today)


# Range summary -----------------------------------------------------------
def tally_event_channels(rows: Iterable[NotificationLogRow]) -> Dict[EventType, Dict[str, int]]:
    """Count rows per trigger, split by channel.

    A channel outside push/whatsapp only bumps the trigger total. Rows with an
    unknown trigger are skipped.
    """
    counts: Dict[EventType, Dict[str, int]] = {
        event_type: {"total": 0, Channel.PUSH.value: 0, Channel.WHATSAPP.value: 0}
        for event_type in EventType
    }
    for row in rows:
        event_type = EventType.parse(row.event_type)
        if event_type is None:
            continue
        bucket = counts[event_type]
        bucket["total"] += 1
        channel = Channel.parse(row.notification_type)
        if channel is not None:
            bucket[channel.value] += 1
    return counts


def count_range_summary(rows: Iterable[NotificationLogRow], start: date, end: date) -> RangeSummary:
    eligible = (
        row for row in rows if row_matches(row, AggregationKind.RANGE_SUMMARY, start=start, end=end)
    )
    counts = tally_event_channels(eligible)

    summary = tuple(
        TriggerCount(trigger=event_type.value, count=counts[event_type]["total"])
        for event_type in EventType
    )
    breakdown = tuple(
        (
            event_type,
            tuple(
                TriggerCount(trigger=channel.value, count=counts[event_type][channel.value])
                for channel in Channel
            ),
        )
        for event_type in EventType
    )
    return RangeSummary(
        date_range=DateRange(start=start, end=end),
        summary=summary,
        breakdown=breakdown,
    )


# Template stats ----------------------------------------------------------
def count_daily_templates(rows: Iterable[NotificationLogRow], today: date) -> List[DailyTemplateCount]:
    """Successful deliveries per (day, template), newest day first."""
    grouped: Counter = Counter(
        (row.created_date, row.template)
        for row in rows
        if row_matches(row, AggregationKind.DAILY_TEMPLATE, today=today)
    )
    ordered = sorted(grouped.items(), key=lambda item: item[0][1])
    ordered.sort(key=lambda item: item[0][0], reverse=True)
    return [
        DailyTemplateCount(sent_date=sent_on, template=template, delivered_count=count)
        for (sent_on, template), count in ordered
    ]


def count_today_templates(rows: Iterable[NotificationLogRow], today: date) -> List[TodayTemplateCount]:
    """Successful deliveries per template for today, busiest template first."""
    grouped: Counter = Counter(
        row.template for row in rows if row_matches(row, AggregationKind.TODAY_TEMPLATE, today=today)
    )
    ordered = sorted(grouped.items(), key=lambda item: (-item[1], item[0]))
    return [
        TodayTemplateCount(template=template, delivered_count=count)
        for template, count in ordered
    ]
