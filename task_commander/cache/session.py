"""Cache database session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from task_commander.cache.models import CacheBase

log = logging.getLogger(__name__)


def get_cache_engine(db_path: Path) -> Engine:
    """Create SQLAlchemy engine for the cache database."""
    return create_engine(
        f"sqlite:///{db_path}",
        connect_args={
            "timeout": 30,
            "check_same_thread": False,
        },
    )


def delete_cache(db_path: Path) -> bool:
    """Delete the cache database file if it exists.

    Returns True if a file was deleted, False otherwise.
    """
    if db_path.exists():
        db_path.unlink()
        log.info("Deleted corrupt or stale cache: %s", db_path)
        return True
    return False


@contextmanager
def get_cache_session(db_path: Path) -> Generator[Session, None, None]:
    """Create a session for the cache database.

    Auto-creates the parent directory and tables on first use. If the
    database file is corrupt, it is deleted and recreated once.

    Args:
        db_path: Path to the SQLite cache file.

    Yields:
        SQLAlchemy Session for the cache database.
    """
    try:
        yield from _open_cache_session(db_path)
    except Exception as exc:
        msg = str(exc).lower()
        if "malformed" in msg or "corrupt" in msg or "not a database" in msg:
            log.warning("Cache database appears corrupt, rebuilding: %s", exc)
            delete_cache(db_path)
            yield from _open_cache_session(db_path)
        else:
            raise


def _open_cache_session(db_path: Path) -> Generator[Session, None, None]:
    """Internal helper that opens the cache session."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = get_cache_engine(db_path)
    CacheBase.metadata.create_all(engine)

    with engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.commit()

    session = sessionmaker(bind=engine)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()
