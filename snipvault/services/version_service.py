"""Version service: deep module for snippet version history.

Owns every business rule around versions: initial and incremental
snapshots, ordered history, restore, and comparison. It is also the only
place that opens transactions for version writes. Callers never talk to
the numbering allocator or the version store directly.

Restore is the one compound write. It creates a backup of the current
state, overwrites the snippet, and records the restored state, all in one
transaction. Either all three writes commit or none do.
"""

import logging
from contextlib import nullcontext
from typing import Callable, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..database import check_deadline, transaction
from ..exceptions import CrossSnippetComparisonError
from ..models import Snippet, SnippetVersion
from ..repositories import SnippetRepository, VersionRepository, VersionNumberAllocator
from ..schemas.version import VersionCreate, VersionComparison, VersionResponse
from .diff_service import diff_lines

INITIAL_VERSION_DESCRIPTION = "initial version"
BACKUP_DESCRIPTION = "backup before restoring to version {number}"
RESTORED_DESCRIPTION = "restored to version {number}"

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str], None]


class VersionService:
    """Version manager for snippets.

    Write operations accept ``commit=False`` so a caller's workflow (for
    example an edit that also records a version) can group them into its
    own transaction. ``listeners`` are called with the snippet id after a
    version write commits, so an external cache can drop stale history.
    """

    def __init__(self, db: Session, listeners: Optional[Iterable[ChangeListener]] = None):
        self.db = db
        self.snippet_repo = SnippetRepository(db)
        self.version_repo = VersionRepository(db)
        self.numbering = VersionNumberAllocator(db)
        self.listeners: List[ChangeListener] = list(listeners or [])

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_initial_version(self, snippet_id: str, commit: bool = True) -> SnippetVersion:
        """Snapshot a freshly created snippet as version 1.

        Not idempotent: a second call raises VersionConflictError.
        Raises SnippetNotFoundError if the snippet does not exist.
        """
        with self._unit_of_work(commit, "create_initial_version"):
            snippet = self.snippet_repo.get_by_id(snippet_id)
            number = self.numbering.claim_initial(snippet_id)
            self.db.refresh(snippet)
            version = self._snapshot(snippet, number, INITIAL_VERSION_DESCRIPTION)
            version_id = version.id

        logger.info(
            "Created initial version",
            extra={"snippet_id": snippet_id, "version_id": version_id, "version_number": number},
        )
        if commit:
            self.notify_changed(snippet_id)
        return version

    def create_version(
        self,
        snippet_id: str,
        change_description: Optional[str] = None,
        commit: bool = True,
    ) -> SnippetVersion:
        """Snapshot the snippet's current state under the next version number.

        A blank change description falls back to the configured default.
        Raises SnippetNotFoundError if the snippet does not exist.
        """
        if not change_description or not change_description.strip():
            change_description = settings.default_change_description

        with self._unit_of_work(commit, "create_version"):
            snippet = self.snippet_repo.get_by_id(snippet_id)
            version = self._next_snapshot(snippet, change_description)
            log_extra = {
                "snippet_id": snippet_id,
                "version_id": version.id,
                "version_number": version.version_number,
            }

        logger.info("Created version", extra=log_extra)
        if commit:
            self.notify_changed(snippet_id)
        return version

    def restore_version(
        self,
        snippet_id: str,
        version_id: str,
        deadline: Optional[float] = None,
    ) -> bool:
        """Revert a snippet to an earlier version without losing history.

        Returns False when the version does not exist, belongs to another
        snippet, or the snippet itself is missing. Any failure after that
        rolls the whole restore back and propagates.

        Args:
            snippet_id: Snippet to restore.
            version_id: Version whose snapshot becomes the current state.
            deadline: Optional ``time.monotonic()`` value; if passed once the
                writes are done, nothing is committed and
                DeadlineExceededError is raised. Rejected restores return
                False without consulting it.
        """
        with transaction(self.db, operation="restore_version"):
            target = self.version_repo.get_by_id_optional(version_id)
            if target is None or target.snippet_id != snippet_id:
                logger.info(
                    "Restore target not found for snippet",
                    extra={"snippet_id": snippet_id, "version_id": version_id},
                )
                return False

            snippet = self.snippet_repo.get_by_id_optional(snippet_id)
            if snippet is None:
                logger.info("Restore on missing snippet", extra={"snippet_id": snippet_id})
                return False

            backup = self._next_snapshot(
                snippet, BACKUP_DESCRIPTION.format(number=target.version_number)
            )
            self.snippet_repo.update(
                snippet,
                title=target.title,
                description=target.description,
                code=target.code,
                language=target.language,
            )
            restored = self._next_snapshot(
                snippet, RESTORED_DESCRIPTION.format(number=target.version_number)
            )
            check_deadline(deadline, "restore_version")
            log_extra = {
                "snippet_id": snippet_id,
                "target_version": target.version_number,
                "backup_version": backup.version_number,
                "restored_version": restored.version_number,
            }

        logger.info("Restored snippet", extra=log_extra)
        self.notify_changed(snippet_id)
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_version_history(self, snippet_id: str) -> List[SnippetVersion]:
        """All versions of a snippet, most recent first."""
        versions = self.version_repo.list_by_snippet(snippet_id)
        return sorted(versions, key=lambda v: v.version_number, reverse=True)

    def get_version(self, version_id: str) -> Optional[SnippetVersion]:
        """Get specific version by ID. Returns None if not found."""
        return self.version_repo.get_by_id_optional(version_id)

    def get_latest_version(self, snippet_id: str) -> Optional[SnippetVersion]:
        return self.version_repo.get_latest(snippet_id)

    def compare_versions(self, from_version_id: str, to_version_id: str) -> Optional[VersionComparison]:
        """Compare two versions of the same snippet.

        Returns None if either version is missing. Raises
        CrossSnippetComparisonError if they belong to different snippets.
        """
        from_version = self.version_repo.get_by_id_optional(from_version_id)
        to_version = self.version_repo.get_by_id_optional(to_version_id)
        if from_version is None or to_version is None:
            return None

        if from_version.snippet_id != to_version.snippet_id:
            raise CrossSnippetComparisonError(from_version_id, to_version_id)

        return VersionComparison(
            from_version=VersionResponse.model_validate(from_version),
            to_version=VersionResponse.model_validate(to_version),
            title_changed=from_version.title != to_version.title,
            description_changed=from_version.description != to_version.description,
            code_changed=from_version.code != to_version.code,
            language_changed=from_version.language != to_version.language,
            code_differences=diff_lines(from_version.code, to_version.code),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def notify_changed(self, snippet_id: str) -> None:
        """Tell listeners a snippet's history changed. Listener errors are logged only."""
        for listener in self.listeners:
            try:
                listener(snippet_id)
            except Exception:
                logger.warning(
                    "Version change listener failed",
                    extra={"snippet_id": snippet_id},
                    exc_info=True,
                )

    def _unit_of_work(self, commit: bool, operation: str):
        if commit:
            return transaction(self.db, operation=operation)
        return nullcontext(self.db)

    def _next_snapshot(self, snippet: Snippet, change_description: str) -> SnippetVersion:
        """Reserve the next number, then snapshot the snippet as seen under that lock."""
        number = self.numbering.next_number(snippet.id)
        self.db.flush()
        self.db.refresh(snippet)
        return self._snapshot(snippet, number, change_description)

    def _snapshot(self, snippet: Snippet, number: int, change_description: str) -> SnippetVersion:
        version = VersionCreate(
            snippet_id=snippet.id,
            version_number=number,
            title=snippet.title,
            description=snippet.description or "",
            code=snippet.code or "",
            language=snippet.language or "",
            created_by=snippet.created_by,
            change_description=change_description,
        )
        return self.version_repo.create_in_transaction(version, self.db)
