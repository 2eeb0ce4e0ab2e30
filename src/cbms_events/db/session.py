"""SQLite session factories for the participant store and event registry."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cbms_events.core.config import DEFAULT_DB_PATH
from cbms_events.db.schema import Base

# One factory per resolved database file
_factories: dict[str, sessionmaker] = {}


def _sqlite_engine(db_path: Path) -> Engine:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    # Single shared connection: the poll thread and request threads both use it
    return create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def get_session_factory(db_path: Path | str | None = None) -> sessionmaker:
    """Return the cached session factory for a database file.

    Args:
        db_path: SQLite file. Defaults to data/cbms_events.db.
    """
    path = Path(db_path or DEFAULT_DB_PATH)
    key = str(path.resolve())

    factory = _factories.get(key)
    if factory is None:
        factory = sessionmaker(bind=_sqlite_engine(path))
        _factories[key] = factory
    return factory


def init_db(db_path: Path | str | None = None) -> sessionmaker:
    """Create missing tables and return the factory for the database."""
    factory = get_session_factory(db_path)
    Base.metadata.create_all(factory.kw["bind"])
    return factory


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """Yield a session that commits on success and rolls back on error.

    Example:
        with session_scope(factory) as session:
            repo.create_participant(session, entity)
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
