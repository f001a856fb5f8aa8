"""SQLite engine for the posts database."""

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine, text

from backend.app.core.logging import EVENT_DB_INITIALIZED, log_event
from backend.app.core.settings import settings

logger = logging.getLogger(__name__)


class DatabaseInitError(Exception):
    """The posts database file cannot be opened."""


def get_resolved_db_path() -> Path:
    return Path(settings.app_db_path).resolve()


def _make_engine(url: str, *, echo: bool) -> Engine:
    # Request handlers run in a threadpool; sessions cross threads.
    return create_engine(url, echo=echo, connect_args={"check_same_thread": False})


get_resolved_db_path().parent.mkdir(parents=True, exist_ok=True)
engine = _make_engine(settings.database_url, echo=settings.debug)


def init_db() -> None:
    """Open a connection and run ``SELECT 1`` against the posts database.

    Raises:
        DatabaseInitError: If the file cannot be opened.  The message names
            the resolved path and ``APP_DB_PATH``.
    """
    path = get_resolved_db_path()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as exc:
        log_event(logger, "error", "db_init_failed", path=path, detail=exc)
        raise DatabaseInitError(
            f"Cannot open posts database at '{path}': {exc}. "
            "Set APP_DB_PATH to a writable location."
        ) from exc
    log_event(logger, "info", EVENT_DB_INITIALIZED, path=path)
