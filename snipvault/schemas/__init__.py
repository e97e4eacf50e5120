"""Pydantic schemas for API validation."""

from .snippet import (
    SnippetBase,
    SnippetCreate,
    SnippetUpdate,
    SnippetResponse,
)
from .version import (
    VersionBase,
    VersionCreate,
    VersionResponse,
    CreateVersionRequest,
    RestoreResponse,
    DiffType,
    CodeDiffLine,
    VersionComparison,
)

__all__ = [
    "SnippetBase",
    "SnippetCreate",
    "SnippetUpdate",
    "SnippetResponse",
    "VersionBase",
    "VersionCreate",
    "VersionResponse",
    "CreateVersionRequest",
    "RestoreResponse",
    "DiffType",
    "CodeDiffLine",
    "VersionComparison",
]
