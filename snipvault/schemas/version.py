"""Version schemas."""

from enum import Enum
from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import List, Optional


class VersionBase(BaseModel):
    """Snapshot fields shared by all version schemas."""
    title: str
    description: str = ""
    code: str = ""
    language: str = ""
    created_by: str
    change_description: str = ""


class VersionCreate(VersionBase):
    """Schema for creating a version record in the store."""
    snippet_id: str
    version_number: int


class VersionResponse(VersionBase):
    """Schema for version response."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    snippet_id: str
    version_number: int
    created_at: datetime


class CreateVersionRequest(BaseModel):
    """Body of a manual "create version" call."""
    change_description: Optional[str] = None


class RestoreResponse(BaseModel):
    """Result of a successful restore."""
    snippet_id: str
    restored_version_id: str
    message: str = "Version restored"


class DiffType(str, Enum):
    """Kind of a line-level diff record."""
    ADDED = "Added"
    REMOVED = "Removed"
    MODIFIED = "Modified"
    UNCHANGED = "Unchanged"


class CodeDiffLine(BaseModel):
    """One positional line comparison between two code texts.

    ``from_content`` is None for Added lines, ``to_content`` is None for
    Removed lines; both are set for Modified and Unchanged.
    """
    model_config = ConfigDict(frozen=True)

    line_number: int
    diff_type: DiffType
    from_content: Optional[str] = None
    to_content: Optional[str] = None


class VersionComparison(BaseModel):
    """Field-level change flags plus the code diff between two versions."""
    from_version: VersionResponse
    to_version: VersionResponse
    title_changed: bool
    description_changed: bool
    code_changed: bool
    language_changed: bool
    code_differences: List[CodeDiffLine]
