"""Database configuration, session management and transaction scope."""

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .core.config import settings
from .exceptions import DeadlineExceededError, TransientStorageError

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url

# Connection execution option marking a transaction that will write.
WRITE_LOCK_OPTION = "snipvault_write_lock"

# Create engine with database-specific tuning.
if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False, "timeout": settings.sqlite_busy_timeout}
    )

    # SQLite defaults foreign_keys to OFF: CASCADE constraints are silently
    # ignored unless we enable them on every connection. WAL lets readers
    # keep their snapshot while a writer holds the write lock.
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()
        # Let SQLAlchemy, not the driver, decide when transactions begin.
        dbapi_connection.isolation_level = None

    # Write scopes opened by transaction() take the write lock up front. A
    # deferred BEGIN would let two writers both hold read locks and deadlock
    # on upgrade, which SQLite reports as "database is locked" without
    # waiting. Plain reads stay deferred so they never block writers.
    @event.listens_for(engine, "begin")
    def _do_begin(conn):
        if conn.get_execution_options().get(WRITE_LOCK_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")
else:
    engine = create_engine(
        DATABASE_URL,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
    )

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create base class for models
Base = declarative_base()


def init_db() -> None:
    """Create all tables that do not exist yet."""
    from . import models  # noqa: F401  (registers mappers on Base)

    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency for FastAPI routes to get database session.

    Rolls back the transaction on unhandled exceptions so that the
    connection is returned to the pool in a clean state.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def check_deadline(deadline: Optional[float], operation: str) -> None:
    """Raise DeadlineExceededError if the ``time.monotonic()`` *deadline* has passed.

    Call it inside a ``transaction()`` block after the last write, so a late
    caller gets a rollback instead of a commit.
    """
    if deadline is not None and time.monotonic() >= deadline:
        raise DeadlineExceededError(operation)


@contextmanager
def transaction(db: Session, operation: str = "transaction") -> Iterator[Session]:
    """Run the enclosed block as one unit of work on *db*.

    Commits when the block completes, rolls back on any exception and
    re-raises it. Driver-level operational failures (connection lost,
    database locked) become ``TransientStorageError`` so callers know the
    whole operation can be retried.

    When *db* has no transaction open yet, the connection is procured with
    ``WRITE_LOCK_OPTION`` so SQLite takes its write lock at BEGIN.

    Args:
        db: Session acting as the transaction handle.
        operation: Name used in logs.
    """
    try:
        if not db.in_transaction():
            db.connection(execution_options={WRITE_LOCK_OPTION: True})
        yield db
        db.commit()
    except OperationalError as e:
        db.rollback()
        logger.warning(
            "Storage failure, rolled back",
            extra={"operation": operation, "error": str(e)},
        )
        raise TransientStorageError(original_error=e) from e
    except Exception:
        db.rollback()
        raise
