"""Mock payloads served when no live log store is available.

These never pass through the aggregation code; they are a boundary-layer
stand-in and every response built from them is tagged ``X-Data-Source: mock``.
"""
from __future__ import annotations

import random
from datetime import date, timedelta
from typing import List, Optional

from application.aggregation import DAILY_WINDOW_DAYS
from domain.notification_log import Channel, EventType, NotificationTemplate
from domain.report import (
    DailyTemplateCount,
    DateRange,
    RangeSummary,
    TodayTemplateCount,
    TriggerCount,
)

# (low, high) per trigger and channel, as shown on the demo dashboard
_CHANNEL_RANGES = {
    EventType.PAYMENT_REMINDER: {Channel.PUSH: (200, 499), Channel.WHATSAPP: (100, 299)},
    EventType.SESSION_REMINDER: {Channel.PUSH: (400, 999), Channel.WHATSAPP: (200, 499)},
}


def mock_range_summary(start: date, end: date, seed: Optional[int] = None) -> RangeSummary:
    rng = random.Random(seed)
    summary = []
    breakdown = []
    for event_type in EventType:
        channel_counts = tuple(
            TriggerCount(trigger=channel.value, count=rng.randint(*_CHANNEL_RANGES[event_type][channel]))
            for channel in Channel
        )
        summary.append(
            TriggerCount(trigger=event_type.value, count=sum(item.count for item in channel_counts))
        )
        breakdown.append((event_type, channel_counts))
    return RangeSummary(
        date_range=DateRange(start=start, end=end),
        summary=tuple(summary),
        breakdown=tuple(breakdown),
    )


def mock_daily_template_stats(today: date, seed: Optional[int] = None) -> List[DailyTemplateCount]:
    rng = random.Random(seed)
    templates = sorted(item.value for item in NotificationTemplate)
    rows = []
    for offset in range(1, DAILY_WINDOW_DAYS + 1):
        sent_on = today - timedelta(days=offset)
        for template in sorted(rng.sample(templates, 2)):
            rows.append(
                DailyTemplateCount(sent_date=sent_on, template=template, delivered_count=rng.randint(20, 90))
            )
    return rows


def mock_today_template_stats(seed: Optional[int] = None) -> List[TodayTemplateCount]:
    rng = random.Random(seed)
    picked = rng.sample(sorted(item.value for item in NotificationTemplate), 3)
    counts = [TodayTemplateCount(template=template, delivered_count=rng.randint(10, 60)) for template in picked]
    counts.sort(key=lambda item: (-item.delivered_count, item.template))
    return counts
