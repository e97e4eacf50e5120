"""Snippet version model."""

import uuid

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database import Base
from .snippet import _utcnow


class SnippetVersion(Base):
    """Version history table. Rows are immutable once written."""

    __tablename__ = "snippet_versions"
    __table_args__ = (
        # Last line of defense against numbering races.
        UniqueConstraint("snippet_id", "version_number", name="uq_snippet_versions_snippet_number"),
        Index("ix_snippet_versions_snippet_id", "snippet_id"),
    )

    # Primary key
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Foreign key to snippet
    snippet_id = Column(String(36), ForeignKey("snippets.id", ondelete="CASCADE"), nullable=False)
    version_number = Column(Integer, nullable=False)

    # Full snapshot of the snippet at creation time
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    code = Column(Text, nullable=False, default="")
    language = Column(String(50), nullable=False, default="")

    # Author info
    created_by = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # Why this version exists ("initial version", "restored to version 3", ...)
    change_description = Column(Text, nullable=False, default="")

    # Relationship
    snippet = relationship("Snippet", back_populates="versions")
