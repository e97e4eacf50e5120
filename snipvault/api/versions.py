"""Version API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db
from ..exceptions import SnippetNotFoundError, VersionNotFoundError
from ..schemas.version import CreateVersionRequest, RestoreResponse, VersionComparison, VersionResponse
from ..services import SnippetService, VersionService

router = APIRouter(prefix="/api/versions", tags=["versions"])


def _verify_snippet(db: Session, snippet_id: str) -> None:
    """Raise 404 if the snippet does not exist."""
    if SnippetService(db).get_snippet(snippet_id) is None:
        raise SnippetNotFoundError(snippet_id)


@router.get("/snippet/{snippet_id}", response_model=List[VersionResponse])
def get_version_history(snippet_id: str, db: Session = Depends(get_db)):
    """List all versions for a snippet, most recent first."""
    _verify_snippet(db, snippet_id)
    return VersionService(db).get_version_history(snippet_id)


@router.post("/snippet/{snippet_id}", response_model=VersionResponse, status_code=201)
def create_version(
    snippet_id: str,
    request: Optional[CreateVersionRequest] = None,
    db: Session = Depends(get_db),
):
    """Record the snippet's current state as a new version."""
    change_description = request.change_description if request else None
    return VersionService(db).create_version(snippet_id, change_description)


@router.get("/snippet/{snippet_id}/latest", response_model=VersionResponse)
def get_latest_version(snippet_id: str, db: Session = Depends(get_db)):
    _verify_snippet(db, snippet_id)
    version = VersionService(db).get_latest_version(snippet_id)
    if version is None:
        raise VersionNotFoundError("latest", snippet_id)
    return version


@router.post("/snippet/{snippet_id}/restore/{version_id}", response_model=RestoreResponse)
def restore_version(snippet_id: str, version_id: str, db: Session = Depends(get_db)):
    """Restore a snippet to one of its versions."""
    if not VersionService(db).restore_version(snippet_id, version_id):
        raise VersionNotFoundError(version_id, snippet_id)
    return RestoreResponse(snippet_id=snippet_id, restored_version_id=version_id)


@router.get("/compare/{from_version_id}/{to_version_id}", response_model=VersionComparison)
def compare_versions(from_version_id: str, to_version_id: str, db: Session = Depends(get_db)):
    """Compare two versions of the same snippet."""
    service = VersionService(db)
    comparison = service.compare_versions(from_version_id, to_version_id)
    if comparison is None:
        missing = from_version_id if service.get_version(from_version_id) is None else to_version_id
        raise VersionNotFoundError(missing)
    return comparison


@router.get("/{version_id}", response_model=VersionResponse)
def get_version(version_id: str, db: Session = Depends(get_db)):
    """Get specific version."""
    version = VersionService(db).get_version(version_id)
    if version is None:
        raise VersionNotFoundError(version_id)
    return version
