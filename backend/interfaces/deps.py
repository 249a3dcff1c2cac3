"""Shared singletons for settings, the log store and the report service.

根据 app_config.yaml 中的 storage 配置，自动选择日志存储的后端实现。
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from app.config import SUPPORTED_BACKENDS, AppConfig, get_settings
from application.report_service import NotificationReportService, make_today_provider
from infrastructure.database import DEFAULT_SQLITE_URL, build_engine
from infrastructure.memory_store import InMemoryNotificationLogRepository
from infrastructure.repository import NotificationLogRepository
from infrastructure.sql_repo import SQLNotificationLogRepository

logger = logging.getLogger(__name__)

settings = get_settings()


def _create_repository(config: AppConfig) -> Optional[NotificationLogRepository]:
    """根据配置创建日志仓储实例；返回 None 表示使用 mock 数据。"""
    backend = config.storage_backend
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(
            f"Unknown storage backend: {backend}. Supported: {', '.join(SUPPORTED_BACKENDS)}"
        )
    if backend == "mock":
        return None
    if backend == "memory":
        return InMemoryNotificationLogRepository()
    if backend == "sqlite":
        engine = build_engine(config.database_url or DEFAULT_SQLITE_URL, echo=config.storage_echo)
        return SQLNotificationLogRepository(engine, create_tables=True)

    if not config.database_url:
        logger.warning("[deps] No DATABASE_URL found. Will use mock data.")
        return None
    engine = build_engine(
        config.database_url,
        schema=config.storage_schema,
        echo=config.storage_echo,
        connect_timeout=config.connect_timeout,
    )
    return SQLNotificationLogRepository(engine)


today_provider = make_today_provider(settings.timezone)
repository = _create_repository(settings)
report_service = (
    NotificationReportService(repository, today_provider) if repository is not None else None
)

logger.info("[deps] Storage backend: %s", settings.storage_backend)
logger.info("[deps] Data source: %s", "live" if report_service else "mock")


# FastAPI dependencies --------------------------------------------------------
def get_app_settings() -> AppConfig:
    return settings


def get_report_service() -> Optional[NotificationReportService]:
    """``None`` means no log store is configured and mock data is served."""
    return report_service


def get_today() -> date:
    return today_provider()
