"""Snippet model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Index, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from ..database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Snippet(Base):
    """Code snippets table (the mutable document under version control)."""

    __tablename__ = "snippets"
    __table_args__ = (
        Index("ix_snippets_created_by", "created_by"),
        Index("ix_snippets_updated_at", "updated_at"),
    )

    # Primary key
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Current state
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    code = Column(Text, nullable=False, default="")
    language = Column(String(50), nullable=False, default="")

    # Ownership
    created_by = Column(String(36), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # Highest version number handed out so far. Incremented atomically by
    # VersionNumberAllocator under the row's write lock.
    last_version_number = Column(Integer, nullable=False, default=0)

    # Relationships
    versions = relationship(
        "SnippetVersion",
        back_populates="snippet",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
