"""Settings loading, environment overrides and backend selection."""
from __future__ import annotations

from datetime import date

import pytest

from app.config import CONFIG_PATH, AppConfig, get_settings
from infrastructure.database import normalize_database_url
from interfaces import deps
from infrastructure.memory_store import InMemoryNotificationLogRepository
from infrastructure.sql_repo import SQLNotificationLogRepository


def test_shipped_config_loads():
    settings = get_settings(CONFIG_PATH)
    assert settings.version == "v1"
    assert settings.storage_schema == "notification"
    assert settings.port == 3001
    assert settings.fallback_on_error is False


def test_environment_wins_over_file(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://reader@db/logs")
    monkeypatch.setenv("NOTIFY_STORAGE", "SQLite")
    config = AppConfig(raw={"storage": {"backend": "postgres", "database_url": "postgresql://other/db"}})
    assert config.database_url == "postgresql://reader@db/logs"
    assert config.storage_backend == "sqlite"


def test_defaults_for_missing_sections(monkeypatch):
    monkeypatch.delenv("NOTIFY_STORAGE", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    config = AppConfig(raw={})
    assert config.storage_backend == "postgres"
    assert config.database_url is None
    assert config.timezone == "UTC"
    assert config.cors_origins == ["*"]
    assert config.log_level == "INFO"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://reader:secret@db:5432/logs", "postgresql://reader:secret@db:5432/logs"),
        ("postgresql+psycopg2://reader@db/logs", "postgresql+psycopg2://reader@db/logs"),
        ("sqlite://", "sqlite://"),
    ],
)
def test_database_url_scheme_is_normalized(url, expected):
    assert normalize_database_url(url) == expected

class TestCreateRepository:
    def test_postgres_without_url_means_mock(self, monkeypatch):
        monkeypatch.delenv("NOTIFY_STORAGE", raising=False)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        assert deps._create_repository(AppConfig(raw={"storage": {"backend": "postgres"}})) is None

    def test_memory_and_mock(self, monkeypatch):
        monkeypatch.delenv("NOTIFY_STORAGE", raising=False)
        assert isinstance(
            deps._create_repository(AppConfig(raw={"storage": {"backend": "memory"}})),
            InMemoryNotificationLogRepository,
        )
        assert deps._create_repository(AppConfig(raw={"storage": {"backend": "mock"}})) is None

    def test_sqlite_creates_tables(self, monkeypatch):
        monkeypatch.delenv("NOTIFY_STORAGE", raising=False)
        monkeypatch.setenv("DATABASE_URL", "sqlite://")
        repo = deps._create_repository(AppConfig(raw={"storage": {"backend": "sqlite"}}))
        assert isinstance(repo, SQLNotificationLogRepository)
        assert repo.list_template_rows(date(2025, 1, 1), date(2025, 1, 2)) == []

    def test_unknown_backend_is_rejected(self, monkeypatch):
        monkeypatch.delenv("NOTIFY_STORAGE", raising=False)
        with pytest.raises(ValueError, match="Unknown storage backend"):
            deps._create_repository(AppConfig(raw={"storage": {"backend": "mongo"}}))
