"""Repository for Post CRUD operations.

:class:`PostRepository` is the contract the controller depends on;
:class:`SqlAlchemyPostRepository` implements it over a caller-supplied
SQLAlchemy ``Session``.  Write methods commit before returning.  Database
failures are rolled back and surfaced as :class:`StorageError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy import Select, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.errors import PostNotFoundError, StorageError, normalize_db_error
from backend.app.core.logging import EVENT_DB_READ_FAILED, EVENT_DB_WRITE_FAILED
from backend.app.models.post import Post
from backend.app.models.post_record import PostRecord

logger = logging.getLogger(__name__)

# Largest value a SQLite INTEGER primary key can hold.
_MAX_ROW_ID = 2**63 - 1


class PostRepository(Protocol):
    def find_all(self) -> list[Post]: ...

    def find_by_search_term(self, term: str) -> list[Post]: ...

    def find_by_id(self, post_id: int) -> Post: ...

    def create(self, post: Post) -> Post: ...

    def update(self, post_id: int, post: Post) -> Post: ...

    def delete(self, post_id: int) -> None: ...


def _utcnow() -> datetime:
    # SQLite DateTime columns are naive; store UTC without tzinfo.
    return datetime.now(UTC).replace(tzinfo=None)


def _row_to_post(row: PostRecord) -> Post:
    return Post(
        id=row.id,
        title=row.title,
        content=row.content,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyPostRepository:
    """SQLAlchemy-backed :class:`PostRepository`."""

    def __init__(self, db: Session, now: Callable[[], datetime] = _utcnow) -> None:
        self._db = db
        self._now = now

    @contextmanager
    def _storage_errors(self, operation: str, *, write: bool) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            if write:
                self._db.rollback()
            error = normalize_db_error(
                exc,
                operation=operation,
                event_name=EVENT_DB_WRITE_FAILED if write else EVENT_DB_READ_FAILED,
            )
            raise StorageError.from_normalized(error) from exc

    def _ordered(self) -> Select[tuple[PostRecord]]:
        return select(PostRecord).order_by(PostRecord.created_at.desc(), PostRecord.id.desc())

    def _get_row(self, post_id: int) -> PostRecord:
        if post_id > _MAX_ROW_ID:
            raise PostNotFoundError(post_id)
        row = self._db.get(PostRecord, post_id)
        if row is None:
            raise PostNotFoundError(post_id)
        return row

    def find_all(self) -> list[Post]:
        """Return every post, newest first."""
        with self._storage_errors("find_all", write=False):
            rows = self._db.scalars(self._ordered()).all()
        return [_row_to_post(r) for r in rows]

    def find_by_search_term(self, term: str) -> list[Post]:
        """Return posts whose title or content contains *term* (case-insensitive).

        ``%`` and ``_`` in *term* match literally.
        """
        stmt = self._ordered().where(
            or_(
                PostRecord.title.icontains(term, autoescape=True),
                PostRecord.content.icontains(term, autoescape=True),
            )
        )
        with self._storage_errors("find_by_search_term", write=False):
            rows = self._db.scalars(stmt).all()
        return [_row_to_post(r) for r in rows]

    def find_by_id(self, post_id: int) -> Post:
        """Fetch a single post.

        Raises:
            PostNotFoundError: If no post with *post_id* exists.
        """
        with self._storage_errors("find_by_id", write=False):
            row = self._get_row(post_id)
        return _row_to_post(row)

    def create(self, post: Post) -> Post:
        """Insert *post* and return it with its generated id and timestamps."""
        now = self._now()
        row = PostRecord(
            title=post.title,
            content=post.content,
            created_at=now,
            updated_at=now,
        )
        with self._storage_errors("create_post", write=True):
            self._db.add(row)
            self._db.commit()
        logger.debug("post_row_inserted: id=%s", row.id)
        return _row_to_post(row)

    def update(self, post_id: int, post: Post) -> Post:
        """Replace title and content of the post addressed by *post_id*.

        Any ``post.id`` is ignored.

        Raises:
            PostNotFoundError: If no post with *post_id* exists.
        """
        with self._storage_errors("update_post", write=True):
            row = self._get_row(post_id)
            row.title = post.title
            row.content = post.content
            row.updated_at = self._now()
            self._db.commit()
        return _row_to_post(row)

    def delete(self, post_id: int) -> None:
        """Delete a post by id.

        Raises:
            PostNotFoundError: If no post with *post_id* exists.
        """
        with self._storage_errors("delete_post", write=True):
            row = self._get_row(post_id)
            self._db.delete(row)
            self._db.commit()
