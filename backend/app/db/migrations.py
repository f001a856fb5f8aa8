"""Bring the posts schema to the Alembic head at startup."""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from backend.app.core.logging import (
    EVENT_DB_MIGRATION_FAILED,
    EVENT_DB_MIGRATION_STARTED,
    EVENT_DB_MIGRATION_SUCCEEDED,
    log_event,
    setup_logging,
)
from backend.app.db.engine import engine

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parents[3]


class MigrationError(Exception):
    """``alembic upgrade head`` failed."""


def _get_alembic_cfg() -> Config:
    cfg = Config(str(_PROJECT_ROOT / "alembic.ini"))
    # Absolute, so migrations run regardless of the working directory.
    cfg.set_main_option("script_location", str(_PROJECT_ROOT / "alembic"))
    return cfg


def get_current_revision() -> str | None:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def get_head_revision() -> str | None:
    return ScriptDirectory.from_config(_get_alembic_cfg()).get_current_head()


def check_schema_current() -> bool:
    """True when the posts database is at the newest migration."""
    current, head = get_current_revision(), get_head_revision()
    if current == head:
        return True
    log_event(logger, "warning", "db_schema_drift", current=current, head=head)
    return False


def run_migrations() -> None:
    """Upgrade the posts database to head; a no-op when already there.

    Raises:
        MigrationError: Wraps the Alembic failure and points at
            ``alembic/versions/``.
    """
    current, head = get_current_revision(), get_head_revision()
    log_event(logger, "info", EVENT_DB_MIGRATION_STARTED, current=current, head=head)
    if current == head:
        log_event(logger, "info", EVENT_DB_MIGRATION_SUCCEEDED, head=head, upgraded=False)
        return
    try:
        command.upgrade(_get_alembic_cfg(), "head")
    except Exception as exc:
        log_event(logger, "exception", EVENT_DB_MIGRATION_FAILED, current=current, detail=exc)
        raise MigrationError(
            f"Migration from {current} to {head} failed: {exc}. "
            "Check alembic/versions/ for the failing script."
        ) from exc
    finally:
        # env.py runs fileConfig(), which replaces the root handlers.
        setup_logging()
    log_event(logger, "info", EVENT_DB_MIGRATION_SUCCEEDED, head=head, upgraded=True)
