"""Per-snippet version number allocation.

Numbers come from ``snippets.last_version_number``, bumped by a single
``UPDATE ... RETURNING`` statement in the caller's transaction. The update
holds the snippet row's write lock (row lock on PostgreSQL, the database
write lock on SQLite) until the caller commits or rolls back, so fetching a
number and inserting the version behave as one atomic step per snippet.
Rolling back also rolls back the counter, which keeps numbering gap-free.
"""

import logging

from sqlalchemy import case, update
from sqlalchemy.orm import Session

from ..models import Snippet
from ..exceptions import SnippetNotFoundError

logger = logging.getLogger(__name__)


class VersionNumberAllocator:
    """Hands out strictly increasing version numbers per snippet."""

    def __init__(self, db: Session):
        self.db = db

    def next_number(self, snippet_id: str) -> int:
        """Reserve and return the next version number for *snippet_id*."""
        stmt = (
            update(Snippet)
            .where(Snippet.id == snippet_id)
            .values(last_version_number=Snippet.last_version_number + 1)
            .returning(Snippet.last_version_number)
            .execution_options(synchronize_session=False)
        )
        number = self.db.execute(stmt).scalar_one_or_none()
        if number is None:
            raise SnippetNotFoundError(snippet_id)
        logger.debug("Allocated version number", extra={"snippet_id": snippet_id, "version_number": number})
        return number

    def claim_initial(self, snippet_id: str) -> int:
        """Lock the snippet's numbering for version 1 and return 1.

        The counter is raised to at least 1 but never lowered. If version 1
        already exists the subsequent insert violates the unique constraint,
        which is how duplicate initial versions are reported.
        """
        stmt = (
            update(Snippet)
            .where(Snippet.id == snippet_id)
            .values(
                last_version_number=case(
                    (Snippet.last_version_number < 1, 1),
                    else_=Snippet.last_version_number,
                )
            )
            .returning(Snippet.id)
            .execution_options(synchronize_session=False)
        )
        if self.db.execute(stmt).scalar_one_or_none() is None:
            raise SnippetNotFoundError(snippet_id)
        return 1
