# telecom_provider/db/engine_sync.py
"""
Synchronous SQLModel engine for the whole application.

SQLite is the default backend. Every new connection gets:
- PRAGMA foreign_keys=ON, so the ON DELETE / ON UPDATE actions declared by
  the policy table are enforced by the engine.
- A REGEXP function, used by the customer email CHECK constraint.
- WAL mode for file databases.
"""
import re
from typing import Generator, Optional

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from ..core.config import get_database_url

_sync_engine: Optional[Engine] = None


def _regexp(pattern: str, value: Optional[str]) -> Optional[bool]:
    # SQLite evaluates `value REGEXP pattern` as regexp(pattern, value)
    if value is None:
        return None
    return re.search(pattern, value) is not None


def _install_sqlite_hooks(engine: Engine, in_memory: bool) -> None:
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        dbapi_connection.create_function("REGEXP", 2, _regexp, deterministic=True)
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON;")
        if not in_memory:
            cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.close()


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build an engine for `database_url`.
    In-memory SQLite URLs share a single connection so every session sees
    the same database (used by the test-suite and the CLI demo).
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo)

    in_memory = database_url in ("sqlite://", "sqlite:///:memory:")
    if in_memory:
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(
            database_url, echo=echo, connect_args={"check_same_thread": False}
        )
    _install_sqlite_hooks(engine, in_memory)
    return engine


def get_sync_engine() -> Engine:
    """Process-wide engine built from DATABASE_URL on first use."""
    global _sync_engine
    if _sync_engine is None:
        _sync_engine = make_engine(get_database_url())
    return _sync_engine


def get_sync_session() -> Generator[Session, None, None]:
    """Yield a session bound to the process-wide engine."""
    with Session(get_sync_engine()) as session:
        yield session


def create_sync_db_and_tables(engine: Optional[Engine] = None) -> None:
    """
    Create all tables with the SYNC engine.
    Models must be imported first so they are registered on SQLModel.metadata.
    """
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine or get_sync_engine())
