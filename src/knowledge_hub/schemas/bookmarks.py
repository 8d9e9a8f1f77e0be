"""
Bookmark Schemas

Pydantic models for Bookmark validation, plus the URL helpers the client
uses when saving a bookmark.
"""

from urllib.parse import urlsplit

from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from knowledge_hub.schemas.base import ChangesBase, EntityRead, TagList

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def validate_http_url(value: str | None) -> str:
    """
    Check that ``value`` is an absolute http(s) URL.

    Returns the trimmed string as given (pydantic's normalized form is
    only used for the check, so the stored URL is what the user typed).
    """
    if value is None or not value.strip():
        raise ValueError("URL is required")
    value = value.strip()
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        raise ValueError("Please enter a valid URL") from None
    return value


def normalize_url(value: str) -> str:
    """Prefix https:// when the user left out the scheme."""
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        value = "https://" + value
    return value


def derive_bookmark_title(url: str) -> str:
    """
    Fallback title for a bookmark saved without one.

    Hostname with a leading ``www.`` removed; the raw URL when it cannot
    be parsed or has no hostname. No network request is made.
    """
    try:
        hostname = urlsplit(url).hostname
    except ValueError:
        return url
    if not hostname:
        return url
    return hostname.removeprefix("www.")


class BookmarkDraft(BaseModel):
    """Fields for a new bookmark. An empty title is filled in by the store."""

    url: str = Field(..., description="Absolute http(s) URL")
    title: str = Field(default="", max_length=500)
    description: str | None = None
    tags: TagList = Field(default_factory=list)

    @field_validator("url", mode="before")
    @classmethod
    def _valid_url(cls, value: str | None) -> str:
        return validate_http_url(value)

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: str | None) -> str:
        return (value or "").strip()

    @field_validator("description")
    @classmethod
    def _empty_description_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class BookmarkChanges(ChangesBase):
    """Partial update for a bookmark; a URL, when given, must be valid."""

    url: str | None = None
    title: str | None = Field(default=None, max_length=500)
    description: str | None = None

    @field_validator("url", mode="before")
    @classmethod
    def _valid_url(cls, value: str | None) -> str:
        return validate_http_url(value)

    @field_validator("title", "description")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class Bookmark(EntityRead):
    """Full bookmark representation as confirmed by the service."""

    url: str
    title: str | None = None
    description: str | None = None
