"""
Note Model

Free-text note owned by a single user.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from knowledge_hub.models.base import Base, OwnedEntityMixin


class Note(Base, OwnedEntityMixin):
    """
    Note entity.

    Attributes:
        title: Note title (max 200 chars), required.
        content: Free text body, optional.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Note(id={self.id!s:.8}, title='{self.title[:20]}...')>"
