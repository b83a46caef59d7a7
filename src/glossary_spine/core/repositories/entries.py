"""Entry repository — glossary_entries.

Tags:
    glossary-spine, repository, entries

Doc-Types:
    api-reference
"""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from glossary_spine.core.models import Entry
from glossary_spine.core.orm.tables import EntryTable


class EntryRepository:
    """Reads and writes ``glossary_entries`` through an ORM session.

    A term may have been generated more than once; every read resolves to
    the oldest row (``created_at`` then ``id``), matching how the publish
    URL is looked up and written back.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # -- reads -----------------------------------------------------------------

    def get_row(self, term: str) -> EntryTable | None:
        """Fetch the oldest row stored for *term*."""
        stmt = (
            select(EntryTable)
            .where(EntryTable.input_term == term)
            .order_by(EntryTable.created_at.asc(), EntryTable.id.asc())
            .limit(1)
        )
        return self.session.scalars(stmt).first()

    def find_by_term(self, term: str) -> Entry | None:
        row = self.get_row(term)
        return Entry.model_validate(row) if row is not None else None

    def list_entries(self, *, limit: int = 50, offset: int = 0) -> tuple[list[Entry], int]:
        """List entries oldest first.  Returns ``(entries, total)``."""
        total = self.session.scalar(select(func.count()).select_from(EntryTable)) or 0
        stmt = (
            select(EntryTable)
            .order_by(EntryTable.created_at.asc(), EntryTable.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return [Entry.model_validate(row) for row in self.session.scalars(stmt)], total

    # -- writes ----------------------------------------------------------------

    def add(self, entry: Entry) -> Entry:
        """Insert a new row from an :class:`Entry` and return it with its id."""
        data = entry.model_dump(
            mode="json",
            by_alias=True,
            exclude={"id", "created_at", "updated_at"},
        )
        row = EntryTable(**data)
        if entry.created_at is not None:
            row.created_at = entry.created_at
        if entry.updated_at is not None:
            row.updated_at = entry.updated_at
        self.session.add(row)
        self.session.commit()
        return Entry.model_validate(row)

    def set_github_pr_url(self, term: str, url: str) -> int:
        """Store the publish URL on every row for *term*.  Returns rows updated."""
        result = self.session.execute(
            update(EntryTable).where(EntryTable.input_term == term).values(github_pr_url=url)
        )
        self.session.commit()
        return result.rowcount
