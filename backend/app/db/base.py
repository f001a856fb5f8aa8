"""Declarative base shared by the ORM models and Alembic autogenerate."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models (see ``backend.app.models.post_record``)."""
