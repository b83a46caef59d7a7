"""
CLI: ``glossary-spine entries`` — inspect and import glossary entries.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from glossary_spine.cli.utils import console, fail, open_session, output_data

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_entry(
    term: str = typer.Argument(..., help="Glossary input term"),
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show the stored entry for TERM."""
    from glossary_spine.core.errors import EntryNotFoundError
    from glossary_spine.core.repositories import EntryRepository

    with open_session(database) as session:
        entry = EntryRepository(session).find_by_term(term)

    if entry is None:
        raise fail(EntryNotFoundError(term))

    if json_out:
        output_data(entry, as_json=True)
        return

    output_data(
        {
            "id": entry.id,
            "input_term": entry.input_term,
            "meta_title": entry.meta_title,
            "categories": ", ".join(entry.categories),
            "takeaways": "yes" if entry.takeaways is not None else "missing",
            "content": f"{len(entry.dynamic_sections_content)} chars" if entry.dynamic_sections_content else "missing",
            "faq": len(entry.faq),
            "github_pr_url": entry.github_pr_url or "-",
            "updated_at": entry.updated_at,
        },
        title=entry.input_term,
    )


@app.command("list")
def list_entries(
    limit: int = typer.Option(50, "--limit", "-n", help="Max rows"),
    offset: int = typer.Option(0, "--offset", help="Rows to skip"),
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List stored entries, oldest first."""
    from glossary_spine.core.repositories import EntryRepository

    with open_session(database) as session:
        entries, total = EntryRepository(session).list_entries(limit=limit, offset=offset)

    if json_out:
        output_data(entries, as_json=True)
        return

    rows = [
        {
            "id": e.id,
            "input_term": e.input_term,
            "published": "yes" if e.is_published else "no",
            "github_pr_url": e.github_pr_url or "-",
        }
        for e in entries
    ]
    output_data(rows, title=f"Entries ({len(entries)} of {total})")


@app.command("import")
def import_entries(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="YAML or JSON file"),
    database: str | None = typer.Option(None, "--database", "-d"),
) -> None:
    """Import one entry (a mapping) or many (a list) from FILE."""
    import yaml
    from pydantic import ValidationError as PydanticValidationError

    from glossary_spine.core.models import Entry
    from glossary_spine.core.repositories import EntryRepository

    try:
        payload = yaml.safe_load(file.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise fail(f"Cannot parse {file}: {e}", code="VALIDATION") from None

    items = payload if isinstance(payload, list) else [payload]
    try:
        entries = [Entry.model_validate(item) for item in items]
    except PydanticValidationError as e:
        raise fail(f"Invalid entry in {file}: {e}", code="VALIDATION") from None

    with open_session(database, create_schema=True) as session:
        repo = EntryRepository(session)
        for entry in entries:
            stored = repo.add(entry)
            console.print(f"[green]✓[/green] {escape(stored.input_term)} (id={stored.id})", highlight=False)

    console.print(f"Imported {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}")
