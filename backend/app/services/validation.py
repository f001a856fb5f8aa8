"""Shared validation for post create/update bodies.

Kept free of FastAPI and SQLAlchemy so the rules are testable on plain
dicts.  All field errors are collected before failing so that clients see
every problem in one response.
"""

import logging
from collections.abc import Mapping
from typing import Any

from backend.app.core.errors import ValidationFailedError
from backend.app.core.logging import EVENT_VALIDATION_FAILED, log_event
from backend.app.models.post import TITLE_MAX_LENGTH

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Title is required"
TITLE_TOO_LONG = f"Title cannot exceed {TITLE_MAX_LENGTH} characters"
CONTENT_REQUIRED = "Content is required"


def _is_blank(value: Any) -> bool:
    """Missing, non-string and whitespace-only values all count as empty."""
    return not isinstance(value, str) or not value.strip()


def collect_post_errors(data: Mapping[str, Any]) -> dict[str, str]:
    """Return a field → message mapping; empty when *data* is valid.

    Emptiness is checked before length, and only one message is kept per
    field.
    """
    errors: dict[str, str] = {}

    title = data.get("title")
    if _is_blank(title):
        errors["title"] = TITLE_REQUIRED
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = TITLE_TOO_LONG

    if _is_blank(data.get("content")):
        errors["content"] = CONTENT_REQUIRED

    return errors


def validate_post_data(data: Mapping[str, Any]) -> None:
    """Raise :class:`ValidationFailedError` carrying every field error found."""
    errors = collect_post_errors(data)
    if errors:
        log_event(
            logger, "info", EVENT_VALIDATION_FAILED,
            fields=",".join(sorted(errors)),
        )
        raise ValidationFailedError(errors)
