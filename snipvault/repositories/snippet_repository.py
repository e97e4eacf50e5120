"""Snippet repository: the authoritative source of a snippet's current state."""

from datetime import datetime, timezone
from typing import Optional

from ..models import Snippet
from ..schemas.snippet import SnippetCreate
from ..exceptions import SnippetNotFoundError
from .base import BaseRepository


class SnippetRepository(BaseRepository[Snippet]):
    """Repository for snippet CRUD operations.

    Writes only flush; the calling service owns the transaction.
    """

    model_class = Snippet
    not_found_error = SnippetNotFoundError

    def create(self, snippet: SnippetCreate) -> Snippet:
        """Create a new snippet."""
        db_snippet = Snippet(
            title=snippet.title,
            description=snippet.description,
            code=snippet.code,
            language=snippet.language,
            created_by=snippet.created_by,
        )
        self.db.add(db_snippet)
        self.db.flush()
        self.db.refresh(db_snippet)
        return db_snippet

    def update(
        self,
        snippet: Snippet,
        title: Optional[str] = None,
        description: Optional[str] = None,
        code: Optional[str] = None,
        language: Optional[str] = None,
    ) -> Snippet:
        """Apply field changes and bump updated_at. None leaves a field as is."""
        if title is not None:
            snippet.title = title
        if description is not None:
            snippet.description = description
        if code is not None:
            snippet.code = code
        if language is not None:
            snippet.language = language
        snippet.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return snippet
