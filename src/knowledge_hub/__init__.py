"""Personal knowledge hub: synchronized notes and bookmarks."""

__version__ = "0.1.0"
