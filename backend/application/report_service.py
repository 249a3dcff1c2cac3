"""Reporting service: fetches log rows and reduces them into dashboard stats."""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable, List, Optional, Tuple, TYPE_CHECKING
from zoneinfo import ZoneInfo

from application.aggregation import (
    count_daily_templates,
    count_range_summary,
    count_today_templates,
    daily_window,
)
from application.errors import InvalidDateRange
from domain.report import DailyTemplateCount, RangeSummary, TodayTemplateCount

if TYPE_CHECKING:  # pragma: no cover
    from infrastructure.repository import NotificationLogRepository

logger = logging.getLogger(__name__)

TodayProvider = Callable[[], date]
MAX_LAST_DAYS = 366


def make_today_provider(timezone_name: str = "UTC") -> TodayProvider:
    """Return a callable giving the current calendar date in ``timezone_name``."""
    tz: tzinfo
    if timezone_name.upper() == "UTC":
        tz = timezone.utc
    else:
        tz = ZoneInfo(timezone_name)
    return lambda: datetime.now(tz).date()


def parse_date_param(value: Optional[str], name: str) -> Optional[date]:
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise InvalidDateRange(f"{name} must be a YYYY-MM-DD date, got {value!r}") from exc


def parse_last_days(value: Optional[str]) -> Optional[int]:
    """``lastDays`` quick range: a whole number of days between 0 and MAX_LAST_DAYS."""
    if value is None or not value.strip():
        return None
    try:
        days = int(value.strip())
    except ValueError as exc:
        raise InvalidDateRange(f"lastDays must be a whole number, got {value!r}") from exc
    if not 0 <= days <= MAX_LAST_DAYS:
        raise InvalidDateRange(f"lastDays must be between 0 and {MAX_LAST_DAYS}, got {days}")
    return days


def resolve_date_range(
    start: Optional[date],
    end: Optional[date],
    today: date,
    last_days: Optional[int] = None,
) -> Tuple[date, date]:
    """Fill in missing bounds.

    ``last_days`` only applies when neither bound is given; otherwise each
    missing bound becomes today. A reversed range is returned as-is.
    """
    if start is None and end is None and last_days is not None:
        return today - timedelta(days=last_days), today
    return start or today, end or today


class NotificationReportService:
    def __init__(
        self,
        repository: "NotificationLogRepository",
        today_provider: Optional[TodayProvider] = None,
    ):
        self.repository = repository
        self._today = today_provider or make_today_provider()

    def today(self) -> date:
        return self._today()

    def build_range_summary(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> RangeSummary:
        start, end = resolve_date_range(start, end, self.today())
        logger.info("[report] Using date range: %s to %s", start, end)
        rows = self.repository.list_summary_rows(start, end)
        logger.info("[report] Summary query returned %d rows.", len(rows))
        return count_range_summary(rows, start, end)

    def build_daily_template_stats(self) -> List[DailyTemplateCount]:
        today = self.today()
        since, until = daily_window(today)
        rows = self.repository.list_template_rows(since, until)
        logger.info("[report] Template stats query returned %d rows.", len(rows))
        return count_daily_templates(rows, today)

    def build_today_template_stats(self) -> List[TodayTemplateCount]:
        today = self.today()
        rows = self.repository.list_template_rows(today, today + timedelta(days=1))
        logger.info("[report] Today template stats query returned %d rows.", len(rows))
        return count_today_templates(rows, today)
