"""
Tag Color Assigner

Deterministic tag -> color mapping with no stored state. A few well-known
tags have fixed colors; any other tag is hashed (sum of character code
points) onto the same ordered palette, so a tag keeps its color across
renders and sessions.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TagColor:
    name: str
    background: str
    text: str


# Order matters: hash fallback indexes into this sequence
TAG_PALETTE: tuple[tuple[str, TagColor], ...] = (
    ("work", TagColor("blue", "bg-tag-blue", "text-tag-blue-text")),
    ("personal", TagColor("green", "bg-tag-green", "text-tag-green-text")),
    ("important", TagColor("pink", "bg-tag-pink", "text-tag-pink-text")),
    ("idea", TagColor("purple", "bg-tag-purple", "text-tag-purple-text")),
    ("todo", TagColor("orange", "bg-tag-orange", "text-tag-orange-text")),
)

_KNOWN_TAGS: dict[str, TagColor] = dict(TAG_PALETTE)
_COLORS: tuple[TagColor, ...] = tuple(color for _, color in TAG_PALETTE)


def tag_hash(tag: str) -> int:
    return sum(ord(char) for char in tag)


def tag_color(tag: str) -> TagColor:
    """Color for ``tag``; known names match case-insensitively."""
    known = _KNOWN_TAGS.get(tag.lower())
    if known is not None:
        return known
    return _COLORS[tag_hash(tag) % len(_COLORS)]
