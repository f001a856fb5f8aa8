"""Post value object exchanged between the controller and the repository."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

TITLE_MAX_LENGTH = 255


class Post(BaseModel):
    """A blog post. ``id`` and the timestamps are assigned by the repository."""

    id: int | None = None
    title: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation used in response envelopes."""
        return self.model_dump(mode="json")
