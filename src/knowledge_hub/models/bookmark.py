"""
Bookmark Model

Saved URL with an optional title and description.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from knowledge_hub.models.base import Base, OwnedEntityMixin


class Bookmark(Base, OwnedEntityMixin):
    """
    Bookmark entity.

    Attributes:
        url: Absolute http(s) URL, required.
        title: Display title; the client derives it from the hostname
            when the user leaves it empty.
        description: Free text, optional.
    """

    __tablename__ = "bookmarks"

    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Bookmark(id={self.id!s:.8}, url='{self.url[:40]}')>"
