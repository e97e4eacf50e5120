"""Data access repositories."""

from .base import BaseRepository
from .snippet_repository import SnippetRepository
from .version_repository import VersionRepository
from .numbering import VersionNumberAllocator

__all__ = [
    "BaseRepository",
    "SnippetRepository",
    "VersionRepository",
    "VersionNumberAllocator",
]
