"""Version repository: append-only store of snippet versions."""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import SnippetVersion
from ..schemas.version import VersionCreate
from ..exceptions import VersionNotFoundError, VersionConflictError
from .base import BaseRepository

logger = logging.getLogger(__name__)


class VersionRepository(BaseRepository[SnippetVersion]):
    """Repository for version records. Versions are never updated or deleted here."""

    model_class = SnippetVersion
    not_found_error = VersionNotFoundError

    def create(self, version: VersionCreate) -> SnippetVersion:
        """Insert a version and commit it on its own."""
        try:
            db_version = self.create_in_transaction(version, self.db)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return db_version

    def create_in_transaction(self, version: VersionCreate, tx: Session) -> SnippetVersion:
        """Insert a version inside the caller's transaction without committing.

        Raises VersionConflictError if the snippet already has this version
        number. The caller is expected to roll *tx* back in that case.
        """
        db_version = SnippetVersion(
            snippet_id=version.snippet_id,
            version_number=version.version_number,
            title=version.title,
            description=version.description,
            code=version.code,
            language=version.language,
            created_by=version.created_by,
            change_description=version.change_description,
        )
        tx.add(db_version)
        try:
            tx.flush()
        except IntegrityError as e:
            logger.warning(
                "Version number already taken",
                extra={"snippet_id": version.snippet_id, "version_number": version.version_number},
            )
            raise VersionConflictError(version.snippet_id, version.version_number) from e
        return db_version

    # get_by_id and get_by_id_optional are inherited from BaseRepository.

    def list_by_snippet(self, snippet_id: str) -> List[SnippetVersion]:
        """All versions of a snippet, in no particular order."""
        return self.db.query(SnippetVersion).filter(
            SnippetVersion.snippet_id == snippet_id
        ).all()

    def get_latest(self, snippet_id: str) -> Optional[SnippetVersion]:
        """Version with the highest number for a snippet."""
        return self.db.query(SnippetVersion).filter(
            SnippetVersion.snippet_id == snippet_id
        ).order_by(SnippetVersion.version_number.desc()).first()

    def count_by_snippet(self, snippet_id: str) -> int:
        return self.db.query(func.count(SnippetVersion.id)).filter(
            SnippetVersion.snippet_id == snippet_id
        ).scalar() or 0
