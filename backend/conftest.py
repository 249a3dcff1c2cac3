"""Shared fixtures: fixed clock, row factory, in-memory store and API client."""
from __future__ import annotations

import os
from datetime import date, datetime, time
from typing import Optional

import pytest

# deps builds its singletons at import time; keep tests off any real database
os.environ["NOTIFY_STORAGE"] = "memory"

from app.config import AppConfig  # noqa: E402
from application.report_service import NotificationReportService  # noqa: E402
from domain.notification_log import NotificationLogRow  # noqa: E402
from infrastructure.memory_store import InMemoryNotificationLogRepository  # noqa: E402

TODAY = date(2025, 1, 8)


def make_row(
    *,
    event_type: Optional[str] = "payment-reminder-job",
    notification_type: Optional[str] = "push",
    template: Optional[str] = "monthly_payment_reminder_v2",
    status: Optional[str] = "success",
    created_at=None,
    hour: int = 10,
) -> NotificationLogRow:
    if created_at is None:
        created_at = TODAY
    if isinstance(created_at, date) and not isinstance(created_at, datetime):
        created_at = datetime.combine(created_at, time(hour=hour))
    return NotificationLogRow(
        event_type=event_type,
        notification_type=notification_type,
        template=template,
        status=status,
        created_at=created_at,
    )


def make_settings(**sections) -> AppConfig:
    raw = {"version": "test", "storage": {"backend": "memory"}, "fallback": {"on_error": False, "seed": 1}}
    raw.update(sections)
    return AppConfig(raw=raw)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def memory_repo() -> InMemoryNotificationLogRepository:
    return InMemoryNotificationLogRepository()


@pytest.fixture
def report_service(memory_repo) -> NotificationReportService:
    return NotificationReportService(memory_repo, today_provider=lambda: TODAY)


@pytest.fixture
def api_settings() -> AppConfig:
    return make_settings()


@pytest.fixture
def client(report_service, api_settings):
    from fastapi.testclient import TestClient

    from app.main import app
    from interfaces import deps

    app.dependency_overrides[deps.get_report_service] = lambda: report_service
    app.dependency_overrides[deps.get_today] = lambda: TODAY
    app.dependency_overrides[deps.get_app_settings] = lambda: api_settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
