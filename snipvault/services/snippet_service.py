"""Snippet service: the editing workflow that sits in front of versioning.

Each public method is one transaction: the snippet write and the version
it produces commit together.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..database import transaction
from ..models import Snippet
from ..repositories import SnippetRepository
from ..schemas.snippet import SnippetCreate, SnippetUpdate
from .version_service import VersionService

logger = logging.getLogger(__name__)


class SnippetService:
    """Thin CRUD over snippets that keeps version history in step."""

    def __init__(self, db: Session, version_service: Optional[VersionService] = None):
        self.db = db
        self.snippet_repo = SnippetRepository(db)
        self.versions = version_service or VersionService(db)

    def create_snippet(self, data: SnippetCreate) -> Snippet:
        """Persist a new snippet together with its version 1."""
        with transaction(self.db, operation="create_snippet"):
            snippet = self.snippet_repo.create(data)
            snippet_id = snippet.id
            self.versions.create_initial_version(snippet_id, commit=False)

        logger.info("Created snippet", extra={"snippet_id": snippet_id})
        self.versions.notify_changed(snippet_id)
        return snippet

    def get_snippet(self, snippet_id: str) -> Optional[Snippet]:
        """Get snippet by ID. Returns None if not found (caller decides on 404)."""
        return self.snippet_repo.get_by_id_optional(snippet_id)

    def update_snippet(self, snippet_id: str, data: SnippetUpdate) -> Snippet:
        """Apply an edit and record it as a new version.

        Raises SnippetNotFoundError if the snippet does not exist.
        """
        with transaction(self.db, operation="update_snippet"):
            snippet = self.snippet_repo.get_by_id(snippet_id)
            self.snippet_repo.update(
                snippet,
                title=data.title,
                description=data.description,
                code=data.code,
                language=data.language,
            )
            self.versions.create_version(snippet_id, data.change_description, commit=False)

        logger.info("Updated snippet", extra={"snippet_id": snippet_id})
        self.versions.notify_changed(snippet_id)
        return snippet
