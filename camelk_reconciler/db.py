"""Database access for the build record history.

Build results are recorded from builder threads while the reconciler reads
them, so SQLite engines are opened for use across threads.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from camelk_reconciler.config import get_settings


class Base(DeclarativeBase):
    """Declarative base of the build record tables."""


def get_engine(db_url: str | None = None) -> Engine:
    """Create an engine for the build record database.

    Args:
        db_url: Database URL. Defaults to ``Settings.db_url``.

    Returns:
        SQLAlchemy Engine.
    """
    url = db_url or get_settings().db_url
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url)


def get_session_factory(engine: Engine | None = None) -> sessionmaker[Session]:
    """Create a session factory bound to an engine.

    Records stay readable after commit, since results are handed back to
    callers once their session is closed.
    """
    return sessionmaker(bind=engine or get_engine(), expire_on_commit=False)


@contextmanager
def get_session(
    session_factory: sessionmaker[Session] | None = None,
) -> Generator[Session, None, None]:
    """Open a session that commits on success and rolls back on error.

    Args:
        session_factory: Factory to open the session with. Defaults to one
            bound to ``Settings.db_url``.

    Yields:
        Session for the transaction.
    """
    factory = session_factory or get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_all_tables(engine: Engine | None = None) -> None:
    """Create the build record tables if they do not exist."""
    # Importing the records module registers its tables on Base.metadata
    from camelk_reconciler.builds import records  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())


__all__ = [
    "Base",
    "create_all_tables",
    "get_engine",
    "get_session",
    "get_session_factory",
]
