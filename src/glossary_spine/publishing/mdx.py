"""MDX rendering for glossary entries.

An entry is published as a single ``.mdx`` document: a YAML frontmatter
block followed by the rendered body produced by the draft-sections step::

    ---
    title: "..."
    description: ...
    h1: ...
    term: Customer Auth
    categories:
      - api-security
    takeaways:
      tldr: ...
      ...
    faq: []
    updatedAt: 2024-11-20T10:00:00.000Z
    slug: customer-auth
    ---
    ## What is Customer Auth?
    ...

The YAML is never line-wrapped, never uses anchors/aliases, keeps the key
order above and uses double quotes whenever a scalar needs quoting.

Tags:
    glossary-spine, publishing, mdx, yaml, frontmatter

Doc-Types:
    api-reference
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from glossary_spine.core.errors import AbortTaskError
from glossary_spine.core.models import Entry, FaqItem, Takeaways
from glossary_spine.core.naming import slugify

FRONTMATTER_DELIMITER = "---"


class _FrontmatterDumper(yaml.SafeDumper):
    """SafeDumper without aliases that prefers double over single quotes."""

    def ignore_aliases(self, data: Any) -> bool:
        return True

    def choose_scalar_style(self) -> str:
        style = super().choose_scalar_style()
        return '"' if style == "'" else style


def _represent_datetime(dumper: yaml.SafeDumper, value: datetime.datetime) -> yaml.ScalarNode:
    # ISO 8601 in UTC with milliseconds: 2024-11-20T10:00:00.000Z
    text = value.astimezone(datetime.UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return dumper.represent_scalar("tag:yaml.org,2002:timestamp", text)


_FrontmatterDumper.add_representer(datetime.datetime, _represent_datetime)


@dataclass(frozen=True)
class PublishableEntry:
    """An entry whose body, takeaways and FAQ have been checked for rendering."""

    entry: Entry
    takeaways: Takeaways
    faq: list[FaqItem]

    @property
    def term(self) -> str:
        return self.entry.input_term

    @property
    def body(self) -> str:
        return self.entry.dynamic_sections_content or ""


def check_publishable(entry: Entry | None, term: str) -> PublishableEntry:
    """Check that *entry* carries everything needed to render, else abort.

    This is the only place stored takeaways and FAQ JSON are parsed.

    Raises:
        AbortTaskError: entry missing, body content missing, takeaways
            missing, or takeaways / FAQ stored in an unexpected shape.
    """
    if entry is None:
        raise AbortTaskError(
            f"Unable to create PR: no glossary entry exists for term: {term}.",
            term=term,
        )
    if not entry.dynamic_sections_content:
        raise AbortTaskError(
            "Unable to create PR: The markdown content for the dynamic sections are not available "
            f"for the entry to term: {term}. It's likely that the draft-sections step didn't run as expected.",
            term=term,
        )
    if entry.takeaways is None:
        raise AbortTaskError(
            f"Unable to create PR: The takeaways are not available for the entry to term: {term}. "
            "It's likely that the content-takeaways step didn't run as expected.",
            term=term,
        )
    try:
        takeaways = Takeaways.model_validate(entry.takeaways)
        faq = [FaqItem.model_validate(item) for item in entry.faq]
    except PydanticValidationError as e:
        raise AbortTaskError(
            f"Unable to create PR: The takeaways or FAQ stored for term: {term} are malformed "
            f"({e.error_count()} problem(s)).",
            term=term,
            cause=e,
        ) from e
    return PublishableEntry(entry=entry, takeaways=takeaways, faq=faq)


def _as_utc(value: datetime.datetime | None) -> datetime.datetime | None:
    # Stored timestamps come back naive from SQLite; they are UTC
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=datetime.UTC)


def build_frontmatter(publishable: PublishableEntry) -> dict[str, Any]:
    """Frontmatter mapping in publishing order."""
    entry = publishable.entry
    takeaways = publishable.takeaways
    return {
        "title": entry.meta_title,
        "description": entry.meta_description,
        "h1": entry.meta_h1,
        "term": entry.input_term,
        "categories": list(entry.categories),
        "takeaways": {
            "tldr": takeaways.tldr,
            "definitionAndStructure": [item.model_dump() for item in takeaways.definition_and_structure],
            "historicalContext": [item.model_dump() for item in takeaways.historical_context],
            "usageInAPIs": {
                "tags": list(takeaways.usage_in_apis.tags),
                "description": takeaways.usage_in_apis.description,
            },
            "bestPractices": list(takeaways.best_practices),
            "recommendedReading": [item.model_dump() for item in takeaways.recommended_reading],
            "didYouKnow": takeaways.did_you_know,
        },
        "faq": [item.model_dump() for item in publishable.faq],
        "updatedAt": _as_utc(entry.updated_at),
        "slug": slugify(entry.input_term),
    }


def dump_frontmatter(data: dict[str, Any]) -> str:
    return yaml.dump(
        data,
        Dumper=_FrontmatterDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    )


def render_mdx(publishable: PublishableEntry) -> str:
    """Render the MDX document for an entry that passed :func:`check_publishable`."""
    frontmatter = dump_frontmatter(build_frontmatter(publishable))
    return f"{FRONTMATTER_DELIMITER}\n{frontmatter}{FRONTMATTER_DELIMITER}\n{publishable.body}"
