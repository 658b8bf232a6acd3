"""
JobDeck - Database engine and sessions.

The store is the source of truth while the app runs; the database is its
durable copy. Writes go through short committed sessions and are retried with
backoff when the backend reports a transient failure (a locked SQLite file,
a dropped PostgreSQL connection).
"""
import logging
import random
import time
from contextlib import contextmanager
from functools import wraps
from typing import Callable, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings

logger = logging.getLogger("jobdeck.database")

Base = declarative_base()

MAX_RETRY_DELAY = 2.0

SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA busy_timeout=5000",
    "PRAGMA foreign_keys=ON",
)


def _sqlite_engine(url: str) -> Engine:
    if ":memory:" in url:
        # A single shared connection, otherwise each session gets an empty database
        logger.info("Using in-memory SQLite database")
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)

    engine = create_engine(url, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _apply_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(pragma)
        cursor.close()

    logger.info(f"Using SQLite database at {url}")
    return engine


def create_app_engine(database_url: Optional[str] = None) -> Engine:
    """
    Build the engine for the configured backend.

    SQLite files get WAL mode, a busy timeout and enforced foreign keys so
    interview and reminder rows cascade with their application. Other
    backends get a pre-pinged connection pool sized from settings.
    """
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        return _sqlite_engine(url)

    logger.info("Using pooled database connection")
    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
    )


engine = create_app_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _is_transient_error(exc: Exception) -> bool:
    # Constraint violations will fail the same way on every attempt
    if isinstance(exc, IntegrityError):
        return False
    return isinstance(exc, (OperationalError, DBAPIError))


def _backoff_delay(attempt: int) -> float:
    delay = min(settings.db_retry_base_delay * (2 ** attempt), MAX_RETRY_DELAY)
    return delay + random.uniform(0, delay / 2)


def with_retry(func: Callable) -> Callable:
    """Retry a database write on transient errors, with jittered exponential backoff."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        attempts = settings.db_retry_max_attempts
        for attempt in range(1, attempts + 1):
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                if attempt >= attempts or not _is_transient_error(exc):
                    raise
                delay = _backoff_delay(attempt - 1)
                logger.warning(
                    "%s failed (attempt %d/%d), retrying in %.2fs: %s",
                    func.__name__, attempt, attempts, delay, exc
                )
                time.sleep(delay)

    return wrapper


@contextmanager
def get_resilient_session(session_factory: Optional[Callable[[], Session]] = None):
    """
    Session that commits on success and rolls back on any error.

    Usage:
        with get_resilient_session() as db:
            db.merge(record)
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
        db.commit()
    except Exception as exc:
        db.rollback()
        if _is_transient_error(exc):
            logger.warning(f"Rolled back write after transient error: {exc}")
        raise
    finally:
        db.close()


def init_db(bind: Optional[Engine] = None):
    """
    Create every table from the ORM models.

    Used for fresh databases and tests; existing databases are brought up
    to date with `alembic upgrade head`.
    """
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine, checkfirst=True)
