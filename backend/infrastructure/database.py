"""SQLModel database configuration."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

logger = logging.getLogger(__name__)

DB_PATH = Path(__file__).resolve().parent.parent / "notification_logs.db"
DEFAULT_SQLITE_URL = f"sqlite:///{DB_PATH}"

_IN_MEMORY_SQLITE = ("sqlite://", "sqlite:///:memory:")


def normalize_database_url(url: str) -> str:
    """Accept the Heroku-style ``postgres://`` scheme SQLAlchemy no longer knows."""
    parsed = make_url(url)
    if parsed.drivername == "postgres":
        return parsed.set(drivername="postgresql").render_as_string(hide_password=False)
    return url


def build_engine(
    url: str,
    *,
    schema: Optional[str] = None,
    echo: bool = False,
    connect_timeout: Optional[int] = None,
) -> Engine:
    """Create an engine for ``url``; ``schema`` prefixes the logs table."""
    url = normalize_database_url(url)
    kwargs = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in _IN_MEMORY_SQLITE:
            # one shared connection, otherwise every checkout sees an empty db
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
        if connect_timeout:
            kwargs["connect_args"] = {"connect_timeout": connect_timeout}

    engine = create_engine(url, **kwargs)
    if schema:
        engine = engine.execution_options(schema_translate_map={None: schema})
    logger.info("[database] Engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def init_db(engine: Engine) -> None:
    """Create tables if they do not exist."""
    from . import models  # noqa: F401  # ensure SQLModel metadata is loaded

    SQLModel.metadata.create_all(engine)


def session_for(engine: Engine) -> Session:
    return Session(engine)
