"""CRUD endpoints for blog posts.

Each route builds a :class:`PostController` for the request and calls the
matching entry point.  ``post_id`` is taken as a raw string so the
controller owns identifier validation.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from backend.app.controllers.post_controller import PostController
from backend.app.core.http import ApiRequest
from backend.app.db.session import get_db
from backend.app.services.post_repository import PostRepository, SqlAlchemyPostRepository

router = APIRouter(prefix="/api/posts")


def get_post_repository(db: Session = Depends(get_db)) -> PostRepository:
    return SqlAlchemyPostRepository(db)


def get_post_controller(
    request: ApiRequest = Depends(ApiRequest.from_request),
    repository: PostRepository = Depends(get_post_repository),
) -> PostController:
    return PostController(request, repository)


@router.get("")
def list_posts(controller: PostController = Depends(get_post_controller)) -> Response:
    """Return all posts, or those matching ``?search=``."""
    return controller.index()


@router.get("/{post_id}")
def get_post(post_id: str, controller: PostController = Depends(get_post_controller)) -> Response:
    return controller.show(post_id)


@router.post("", status_code=201)
def create_post(controller: PostController = Depends(get_post_controller)) -> Response:
    """Create a post from a ``{"title", "content"}`` JSON body."""
    return controller.store()


@router.put("/{post_id}")
def update_post(post_id: str, controller: PostController = Depends(get_post_controller)) -> Response:
    """Replace a post's title and content."""
    return controller.update(post_id)


@router.delete("/{post_id}", status_code=204, response_model=None)
def delete_post(post_id: str, controller: PostController = Depends(get_post_controller)) -> Response:
    return controller.destroy(post_id)
