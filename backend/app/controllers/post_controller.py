"""HTTP controller for blog post CRUD.

Translates request input into :class:`PostRepository` calls and repository
results into success envelopes.  Every failure is raised as an
:class:`~backend.app.core.errors.ApiError` and left for the registered error
handler to render; nothing is recovered here.
"""

import logging
import re

from fastapi.responses import Response

from backend.app.core.errors import InvalidIdentifierError
from backend.app.core.http import ApiRequest, ApiResponse
from backend.app.core.logging import (
    EVENT_POST_CREATED,
    EVENT_POST_DELETED,
    EVENT_POST_UPDATED,
    log_event,
)
from backend.app.models.post import Post
from backend.app.services.post_repository import PostRepository
from backend.app.services.validation import validate_post_data

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


def parse_post_id(raw_id: str) -> int:
    """Coerce a path identifier to a positive int.

    Raises:
        InvalidIdentifierError: If *raw_id* is not a base-10 integer > 0.
    """
    text = str(raw_id).strip()
    if not _ID_PATTERN.fullmatch(text):
        raise InvalidIdentifierError(raw_id)
    post_id = int(text)
    if post_id <= 0:
        raise InvalidIdentifierError(raw_id)
    return post_id


class PostController:
    """Entry points ``index``, ``show``, ``store``, ``update`` and ``destroy``."""

    def __init__(
        self,
        request: ApiRequest,
        repository: PostRepository,
        response: ApiResponse | None = None,
    ) -> None:
        self.request = request
        self.repository = repository
        self.response = response or ApiResponse()

    def index(self) -> Response:
        """List all posts, or those matching the ``search`` query parameter."""
        search = self.request.query("search")
        if search:
            posts = self.repository.find_by_search_term(search)
        else:
            posts = self.repository.find_all()
        return self.response.success([p.to_dict() for p in posts])

    def show(self, id: str) -> Response:
        post = self.repository.find_by_id(parse_post_id(id))
        return self.response.success(post.to_dict())

    def store(self) -> Response:
        post = self._post_from_body()
        created = self.repository.create(post)
        log_event(
            logger, "info", EVENT_POST_CREATED,
            post_id=created.id,
            title_len=len(created.title),
            content_len=len(created.content),
        )
        return self.response.success(created.to_dict(), 201)

    def update(self, id: str) -> Response:
        """Replace a post's title and content; the path id is authoritative."""
        post_id = parse_post_id(id)
        post = self._post_from_body()
        updated = self.repository.update(post_id, post)
        log_event(
            logger, "info", EVENT_POST_UPDATED,
            post_id=post_id,
            title_len=len(updated.title),
            content_len=len(updated.content),
        )
        return self.response.success(updated.to_dict())

    def destroy(self, id: str) -> Response:
        post_id = parse_post_id(id)
        self.repository.delete(post_id)
        log_event(logger, "info", EVENT_POST_DELETED, post_id=post_id)
        return self.response.success(None, 204)

    def _post_from_body(self) -> Post:
        data = self.request.get_json_body()
        validate_post_data(data)
        return Post(id=None, title=data["title"], content=data["content"])
