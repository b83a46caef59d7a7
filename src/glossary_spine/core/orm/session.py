"""SQLAlchemy engine factory and session helpers.

This module provides:

* ``create_glossary_engine``    -- Create a SA engine from a URL.
* ``GlossarySession``           -- A pre-configured ``Session`` subclass.
* ``glossary_session_factory``  -- ``sessionmaker`` producing ``GlossarySession``.
* ``init_schema``               -- Create all mapped tables.
* ``session_scope``             -- Engine + session for one unit of work.

Tags:
    glossary-spine, orm, sqlalchemy, session, engine

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine as _sa_create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from glossary_spine.core.orm.base import GlossaryBase


def create_glossary_engine(
    url: str = "sqlite:///data/glossary.db",
    *,
    echo: bool = False,
    **kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine with sane defaults.

    Parameters
    ----------
    url:
        Database URL (``sqlite:///…``, ``postgresql://…``, etc.)
    echo:
        If ``True``, log all SQL to stdout.
    **kwargs:
        Extra arguments forwarded to ``sqlalchemy.create_engine``.
    """
    if not url.startswith("sqlite"):
        return _sa_create_engine(url, echo=echo, **kwargs)

    # File-backed SQLite needs its directory to exist before the first connect
    database = make_url(url).database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)

    kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = _sa_create_engine(url, echo=echo, **kwargs)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


class GlossarySession(Session):
    """Pre-configured session with ``expire_on_commit=False``.

    Prevents lazy-load surprises after commit when rows are converted to
    pydantic models outside the transaction.
    """

    def __init__(self, bind: Engine | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("expire_on_commit", False)
        super().__init__(bind=bind, **kwargs)


def glossary_session_factory(engine: Engine) -> sessionmaker[GlossarySession]:
    """Return a ``sessionmaker`` bound to *engine* that produces ``GlossarySession`` instances."""
    return sessionmaker(bind=engine, class_=GlossarySession)


def init_schema(engine: Engine) -> list[str]:
    """Create every table registered on :class:`GlossaryBase`.  Returns the table names."""
    GlossaryBase.metadata.create_all(engine)
    return sorted(GlossaryBase.metadata.tables)


@contextmanager
def session_scope(url: str, *, echo: bool = False, create_schema: bool = False) -> Iterator[GlossarySession]:
    """Open an engine + session for one unit of work and dispose both afterwards.

    Usage::

        with session_scope(settings.database_url) as session:
            EntryRepository(session).find_by_term("Webhook")
    """
    engine = create_glossary_engine(url, echo=echo)
    try:
        if create_schema:
            init_schema(engine)
        with GlossarySession(bind=engine) as session:
            yield session
    finally:
        engine.dispose()
