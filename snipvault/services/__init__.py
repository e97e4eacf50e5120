"""Business logic services."""

from .version_service import VersionService
from .snippet_service import SnippetService

__all__ = ["VersionService", "SnippetService"]
