"""Client package - entity synchronization and derived views."""

from knowledge_hub.client.entities import BOOKMARK_TYPE, NOTE_TYPE, EntityType
from knowledge_hub.client.filters import (
    FavoriteMode,
    FilterCriteria,
    FilteredView,
    distinct_tags,
    filter_entities,
    matches,
)
from knowledge_hub.client.notifier import LoggingNotifier, Notifier
from knowledge_hub.client.service import EntityService, HttpEntityService
from knowledge_hub.client.session import HubSession, HubSummary
from knowledge_hub.client.store import BookmarkStore, EntityStore, NoteStore
from knowledge_hub.client.tag_colors import TAG_PALETTE, TagColor, tag_color

__all__ = [
    "EntityType",
    "NOTE_TYPE",
    "BOOKMARK_TYPE",
    "EntityService",
    "HttpEntityService",
    "EntityStore",
    "NoteStore",
    "BookmarkStore",
    "FavoriteMode",
    "FilterCriteria",
    "FilteredView",
    "matches",
    "filter_entities",
    "distinct_tags",
    "TagColor",
    "TAG_PALETTE",
    "tag_color",
    "Notifier",
    "LoggingNotifier",
    "HubSession",
    "HubSummary",
]
