"""SQLAlchemy 2.0 ORM layer for glossary-spine.

Modules
-------
base        GlossaryBase (declarative base) + TimestampMixin
session     Engine factory, GlossarySession, init_schema
tables      EntryTable

Tags:
    glossary-spine, orm, sqlalchemy, declarative

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from glossary_spine.core.orm.base import GlossaryBase, TimestampMixin
from glossary_spine.core.orm.session import (
    GlossarySession,
    create_glossary_engine,
    glossary_session_factory,
    init_schema,
    session_scope,
)
from glossary_spine.core.orm.tables import EntryTable

__all__ = [
    "GlossaryBase",
    "TimestampMixin",
    "create_glossary_engine",
    "GlossarySession",
    "glossary_session_factory",
    "init_schema",
    "session_scope",
    "EntryTable",
]
