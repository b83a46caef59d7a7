"""
CLI: ``glossary-spine db`` — database management commands.
"""

from __future__ import annotations

import typer

from glossary_spine.cli.utils import console, output_data

app = typer.Typer(no_args_is_help=True)


@app.command()
def init(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Initialise database schema (create tables)."""
    from glossary_spine.core.orm import create_glossary_engine, init_schema
    from glossary_spine.core.settings import get_settings

    settings = get_settings()
    url = database or settings.database_url
    engine = create_glossary_engine(url, echo=settings.database_echo)
    try:
        tables = init_schema(engine)
    finally:
        engine.dispose()

    if json_out:
        output_data({"database_url": url, "tables": tables}, as_json=True)
        return
    console.print(f"[green]✓[/green] Schema ready at {url}", highlight=False)
    for name in tables:
        console.print(f"  • {name}")
