"""Pydantic models for glossary entries.

The JSON columns of ``glossary_entries`` store takeaways and FAQ items with
the camelCase keys used by the published frontmatter (``tldr``,
``definitionAndStructure``, ``usageInAPIs``, ...).  The models expose them
as snake_case attributes through aliases and accept either spelling on
input.  ``Entry`` keeps those columns as stored; they are parsed into
``Takeaways`` and ``FaqItem`` only when an entry is about to be rendered,
so reading a row never fails on its JSON shape.

Tags:
    glossary-spine, models, pydantic, data-model

Doc-Types:
    api-reference, data-model
"""

from __future__ import annotations

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class KeyValue(_Model):
    """One labelled fact, e.g. ``{"key": "Scope", "value": "per request"}``."""

    key: str
    value: str


class ReadingItem(_Model):
    title: str
    url: str


class UsageInApis(_Model):
    tags: list[str] = Field(default_factory=list)
    description: str = ""


class Takeaways(_Model):
    """Structured summary attached to an entry by the takeaways step."""

    tldr: str
    definition_and_structure: list[KeyValue] = Field(default_factory=list, alias="definitionAndStructure")
    historical_context: list[KeyValue] = Field(default_factory=list, alias="historicalContext")
    usage_in_apis: UsageInApis = Field(default_factory=UsageInApis, alias="usageInAPIs")
    best_practices: list[str] = Field(default_factory=list, alias="bestPractices")
    recommended_reading: list[ReadingItem] = Field(default_factory=list, alias="recommendedReading")
    did_you_know: str = Field(default="", alias="didYouKnow")


class FaqItem(_Model):
    question: str
    answer: str


class Entry(_Model):
    """A glossary-term record and its generated content.

    Built from an ``EntryTable`` row with ``Entry.model_validate(row)``.
    ``takeaways`` and ``dynamic_sections_content`` are ``None`` until the
    upstream generation steps have run.  ``takeaways`` and ``faq`` hold the
    raw JSON column values.
    """

    id: int | None = None
    input_term: str
    meta_title: str = ""
    meta_description: str = ""
    meta_h1: str = ""
    categories: list[str] = Field(default_factory=list)
    takeaways: dict[str, Any] | None = None
    faq: list[dict[str, Any]] = Field(default_factory=list)
    dynamic_sections_content: str | None = None
    github_pr_url: str | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None

    @field_validator("categories", "faq", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("meta_title", "meta_description", "meta_h1", mode="before")
    @classmethod
    def _none_as_blank(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def is_published(self) -> bool:
        return bool(self.github_pr_url)
