"""Snippet schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional


class SnippetBase(BaseModel):
    """Base snippet schema."""
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    code: str = ""
    language: str = Field(default="", max_length=50)

    @field_validator('title')
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be blank")
        return v


class SnippetCreate(SnippetBase):
    """Schema for creating a snippet."""
    created_by: str = Field(min_length=1, max_length=36)


class SnippetUpdate(BaseModel):
    """Schema for editing a snippet. Omitted fields keep their current value."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    code: Optional[str] = None
    language: Optional[str] = Field(default=None, max_length=50)
    change_description: Optional[str] = None

    @field_validator('title')
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be blank")
        return v


class SnippetResponse(SnippetBase):
    """Schema for snippet response."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_by: str
    created_at: datetime
    updated_at: datetime
