"""Snippet API endpoints.

Endpoints are thin: SnippetService keeps the snippet and its version
history in step.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..exceptions import SnippetNotFoundError
from ..schemas.snippet import SnippetCreate, SnippetResponse, SnippetUpdate
from ..services import SnippetService

router = APIRouter(prefix="/api/snippets", tags=["snippets"])


@router.post("", response_model=SnippetResponse, status_code=201)
def create_snippet(snippet: SnippetCreate, db: Session = Depends(get_db)):
    """Create a snippet and its initial version."""
    return SnippetService(db).create_snippet(snippet)


@router.get("/{snippet_id}", response_model=SnippetResponse)
def get_snippet(snippet_id: str, db: Session = Depends(get_db)):
    snippet = SnippetService(db).get_snippet(snippet_id)
    if snippet is None:
        raise SnippetNotFoundError(snippet_id)
    return snippet


@router.put("/{snippet_id}", response_model=SnippetResponse)
def update_snippet(snippet_id: str, update: SnippetUpdate, db: Session = Depends(get_db)):
    """Edit a snippet; the edit is recorded as a new version."""
    return SnippetService(db).update_snippet(snippet_id, update)
