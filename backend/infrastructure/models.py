"""SQLModel ORM table mirroring the notification log store."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field


class NotificationLogModel(SQLModel, table=True):
    """``notification.logs``: one row per send attempt.

    The schema prefix is applied per engine (see ``database.build_engine``) so
    SQLite keeps working with a bare ``logs`` table.
    """

    __tablename__ = "logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    event_type: str = Field(index=True)
    notification_type: str
    template: Optional[str] = Field(default=None, index=True)
    status: str = Field(default="success")
    # naive timestamps; day boundaries come from the configured clock
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=False), index=True, nullable=False),
    )
