"""SQL-backed log store (PostgreSQL in production, SQLite locally)."""
from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, List

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select

from application.errors import RowSourceUnavailable
from domain.notification_log import (
    Channel,
    DeliveryStatus,
    EventType,
    NotificationLogRow,
    NotificationTemplate,
)
from .database import init_db, session_for
from .models import NotificationLogModel
from .repository import NotificationLogRepository

logger = logging.getLogger(__name__)


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min)


class SQLNotificationLogRepository(NotificationLogRepository):
    """Pushes the allow-list and date predicates into the query.

    Day bounds are half-open timestamp ranges, equivalent to
    ``DATE(created_at) BETWEEN start AND end`` on naive timestamps.
    """

    def __init__(self, engine: Engine, *, create_tables: bool = False):
        self._engine = engine
        if create_tables:
            init_db(engine)

    # Reads ----------------------------------------------------------------
    def list_summary_rows(self, start: date, end: date) -> List[NotificationLogRow]:
        stmt = (
            select(NotificationLogModel)
            .where(col(NotificationLogModel.event_type).in_([item.value for item in EventType]))
            .where(col(NotificationLogModel.notification_type).in_([item.value for item in Channel]))
            .where(NotificationLogModel.created_at >= _day_start(start))
            .where(NotificationLogModel.created_at < _day_start(end + timedelta(days=1)))
        )
        return self._fetch(stmt)

    def list_template_rows(self, since: date, until: date) -> List[NotificationLogRow]:
        stmt = (
            select(NotificationLogModel)
            .where(col(NotificationLogModel.template).in_([item.value for item in NotificationTemplate]))
            .where(NotificationLogModel.status == DeliveryStatus.SUCCESS.value)
            .where(NotificationLogModel.created_at >= _day_start(since))
            .where(NotificationLogModel.created_at < _day_start(until))
        )
        return self._fetch(stmt)

    def _fetch(self, stmt) -> List[NotificationLogRow]:
        try:
            with session_for(self._engine) as session:
                models = session.exec(stmt).all()
                return [self._row_from_model(model) for model in models]
        except SQLAlchemyError as exc:
            logger.error("[sql_repo] Error executing query", exc_info=True)
            raise RowSourceUnavailable(str(exc)) from exc

    # Writes ---------------------------------------------------------------
    def add_rows(self, rows: Iterable[NotificationLogRow]) -> int:
        models = [self._model_from_row(row) for row in rows]
        try:
            with session_for(self._engine) as session, session.begin():
                session.add_all(models)
        except SQLAlchemyError as exc:
            raise RowSourceUnavailable(str(exc)) from exc
        return len(models)

    # Helpers ----------------------------------------------------------------
    @staticmethod
    def _row_from_model(model: NotificationLogModel) -> NotificationLogRow:
        return NotificationLogRow(
            event_type=model.event_type,
            notification_type=model.notification_type,
            template=model.template,
            status=model.status,
            created_at=model.created_at,
        )

    @staticmethod
    def _model_from_row(row: NotificationLogRow) -> NotificationLogModel:
        created_at = row.created_at
        if created_at is not None and not isinstance(created_at, datetime):
            created_at = _day_start(created_at)
        return NotificationLogModel(
            event_type=row.event_type,
            notification_type=row.notification_type,
            template=row.template,
            status=row.status,
            created_at=created_at or datetime.utcnow(),
        )
