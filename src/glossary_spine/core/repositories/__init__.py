"""Repositories over the glossary-spine ORM tables."""

from glossary_spine.core.repositories.entries import EntryRepository

__all__ = ["EntryRepository"]
