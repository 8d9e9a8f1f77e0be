"""
Collection Repositories

Concrete repositories for the two user-owned collections.
"""

from knowledge_hub.models import Bookmark, Note
from knowledge_hub.repositories.base import OwnedRepository


class NoteRepository(OwnedRepository[Note]):
    def __init__(self) -> None:
        super().__init__(Note)


class BookmarkRepository(OwnedRepository[Bookmark]):
    def __init__(self) -> None:
        super().__init__(Bookmark)


# Module-level singletons for convenience imports
note_repository = NoteRepository()
bookmark_repository = BookmarkRepository()
