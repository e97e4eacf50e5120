"""Database models."""

from .snippet import Snippet
from .version import SnippetVersion

__all__ = ["Snippet", "SnippetVersion"]
