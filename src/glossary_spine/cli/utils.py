"""
CLI utility helpers — output formatting and session management.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from glossary_spine.core.errors import GlossaryError
from glossary_spine.core.orm import GlossarySession, session_scope
from glossary_spine.core.settings import get_settings

console = Console()
err_console = Console(stderr=True)


# ── Session helper ───────────────────────────────────────────────────────


@contextmanager
def open_session(database: str | None = None, *, create_schema: bool = False) -> Iterator[GlossarySession]:
    """Open a session on *database* (a SQLAlchemy URL), defaulting to settings."""
    settings = get_settings()
    url = database or settings.database_url
    with session_scope(url, echo=settings.database_echo, create_schema=create_schema) as session:
        yield session


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def output_data(data: Any, *, as_json: bool = False, title: str = "") -> None:
    """Render a dict, model or list of them to the terminal."""
    if as_json:
        payload = [_to_dict(d) for d in data] if isinstance(data, list | tuple) else _to_dict(data)
        console.print_json(json.dumps(payload, default=str))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


def fail(error: Exception | str, *, code: str | None = None) -> typer.Exit:
    """Print an error and return a ``typer.Exit(1)`` for the caller to raise."""
    if isinstance(error, GlossaryError):
        code = code or error.category.value
        message = error.message
    else:
        message = str(error)
    err_console.print(f"[bold red]Error[/bold red] ({code or 'ERROR'}): {escape(message)}", highlight=False)
    return typer.Exit(code=1)


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(escape(str(v)) for v in d.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {escape(str(v))}", highlight=False)
