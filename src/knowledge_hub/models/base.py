"""
SQLAlchemy Base Models

Provides the declarative base and reusable mixins for all ORM models.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base class for all SQLAlchemy ORM models."""

    pass


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at timestamp fields.

    Behavior:
        - created_at: Set on INSERT, never changed afterwards
        - updated_at: Set on INSERT and refreshed on every UPDATE, so
          listings can be ordered most-recently-touched first

    Note:
        Uses timezone-aware timestamps for proper UTC handling.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        index=True,
    )


class OwnedEntityMixin(TimestampMixin):
    """
    Columns shared by every user-owned collection (notes, bookmarks).

    Attributes:
        id: UUID primary key (generated Python-side).
        user_id: Owner identifier; every query is scoped to it.
        tags: Lowercase tag list, stored as JSON.
        is_favorite: Favorite flag.
    """

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_favorite: Mapped[bool] = mapped_column(default=False, nullable=False)
