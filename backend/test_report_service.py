"""Report service: default dates and wiring between store and reducers."""
from __future__ import annotations

from datetime import date, timedelta

import pytest

from application.errors import InvalidDateRange, RowSourceUnavailable
from application.report_service import (
    NotificationReportService,
    make_today_provider,
    parse_date_param,
    parse_last_days,
    resolve_date_range,
)
from infrastructure.repository import NotificationLogRepository
from conftest import TODAY, make_row


class _BrokenRepository(NotificationLogRepository):
    def list_summary_rows(self, start, end):
        raise RowSourceUnavailable("connection refused")

    def list_template_rows(self, since, until):
        raise RowSourceUnavailable("connection refused")

    def add_rows(self, rows):
        raise RowSourceUnavailable("connection refused")


class TestDateParams:
    def test_parse_accepts_iso_dates_and_blank(self):
        assert parse_date_param("2025-01-01", "startDate") == date(2025, 1, 1)
        assert parse_date_param(None, "startDate") is None
        assert parse_date_param("  ", "startDate") is None

    @pytest.mark.parametrize("value", ["2025-13-01", "yesterday", "01/02/2025"])
    def test_parse_rejects_other_formats(self, value):
        with pytest.raises(InvalidDateRange, match="startDate"):
            parse_date_param(value, "startDate")

    def test_missing_bounds_default_to_today(self):
        assert resolve_date_range(None, None, TODAY) == (TODAY, TODAY)
        assert resolve_date_range(date(2025, 1, 1), None, TODAY) == (date(2025, 1, 1), TODAY)
        assert resolve_date_range(None, date(2025, 1, 1), TODAY) == (TODAY, date(2025, 1, 1))

    def test_last_days_only_without_explicit_bounds(self):
        assert resolve_date_range(None, None, TODAY, last_days=7) == (TODAY - timedelta(days=7), TODAY)
        assert resolve_date_range(date(2025, 1, 2), None, TODAY, last_days=7) == (date(2025, 1, 2), TODAY)

    def test_last_days_parsing(self):
        assert parse_last_days("7") == 7
        assert parse_last_days("0") == 0
        assert parse_last_days(None) is None
        assert parse_last_days("") is None

    @pytest.mark.parametrize("value", ["-1", "400", "abc", "1.5"])
    def test_last_days_rejects_bad_values(self, value):
        with pytest.raises(InvalidDateRange, match="lastDays"):
            parse_last_days(value)

    def test_today_provider_returns_a_date(self):
        assert isinstance(make_today_provider("UTC")(), date)


class TestReportService:
    def test_summary_defaults_to_today(self, report_service, memory_repo):
        memory_repo.add_rows([make_row(), make_row(created_at=TODAY - timedelta(days=1))])
        result = report_service.build_range_summary()
        assert result.date_range.start == result.date_range.end == TODAY
        assert result.summary[0].count == 1

    def test_daily_template_stats_use_trailing_week(self, report_service, memory_repo):
        memory_repo.add_rows(
            [make_row(created_at=TODAY - timedelta(days=offset)) for offset in range(0, 10)]
        )
        result = report_service.build_daily_template_stats()
        assert [item.sent_date for item in result] == [TODAY - timedelta(days=offset) for offset in range(1, 8)]

    def test_today_template_stats(self, report_service, memory_repo):
        memory_repo.add_rows([make_row(), make_row(created_at=TODAY - timedelta(days=1))])
        result = report_service.build_today_template_stats()
        assert [(item.template, item.delivered_count) for item in result] == [("monthly_payment_reminder_v2", 1)]

    def test_store_failures_propagate(self):
        service = NotificationReportService(_BrokenRepository(), today_provider=lambda: TODAY)
        with pytest.raises(RowSourceUnavailable):
            service.build_range_summary()
        with pytest.raises(RowSourceUnavailable):
            service.build_today_template_stats()
