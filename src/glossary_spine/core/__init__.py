"""Glossary Spine Core -- domain primitives for glossary publishing.

Modules
-------
errors          Structured error hierarchy (GlossaryError, AbortTaskError, ...)
settings        GlossarySettings (pydantic-settings) + cached get_settings()
models          pydantic models for entries, takeaways and FAQ items
naming          Term -> file stem, branch name, content path, slug
orm             SQLAlchemy declarative base, engine/session factory, tables
repositories    EntryRepository (read by term, write publish URL)

Tags:
    glossary-spine, core, package-overview

Doc-Types:
    package-overview, module-index
"""
