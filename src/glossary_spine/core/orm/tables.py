"""Table definitions for glossary entries.

Tags:
    glossary-spine, orm, sqlalchemy, tables

Doc-Types:
    api-reference, data-model
"""

from __future__ import annotations

from sqlalchemy import JSON, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from glossary_spine.core.orm.base import GlossaryBase, TimestampMixin


class EntryTable(TimestampMixin, GlossaryBase):
    __tablename__ = "glossary_entries"
    __table_args__ = (Index("ix_glossary_entries_input_term", "input_term"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    input_term: Mapped[str] = mapped_column(Text, nullable=False)

    # --- display metadata ---
    meta_title: Mapped[str | None] = mapped_column(Text)
    meta_description: Mapped[str | None] = mapped_column(Text)
    meta_h1: Mapped[str | None] = mapped_column(Text)
    categories: Mapped[list | None] = mapped_column(JSON, default=list)

    # --- generated content ---
    takeaways: Mapped[dict | None] = mapped_column(JSON, default=None)
    faq: Mapped[list | None] = mapped_column(JSON, default=list)
    dynamic_sections_content: Mapped[str | None] = mapped_column(Text)

    # --- publishing ---
    github_pr_url: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"EntryTable(id={self.id!r}, input_term={self.input_term!r})"
