"""
CLI: ``glossary-spine config`` — configuration inspection.
"""

from __future__ import annotations

import typer

from glossary_spine.cli.utils import console

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json"),
) -> None:
    """Show current configuration.  The GitHub token is always masked."""
    from glossary_spine.core.settings import get_settings

    settings = get_settings()

    if format == "json":
        console.print_json(settings.model_dump_json())
        return

    from rich.table import Table

    table = Table(title="glossary-spine settings")
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value) if value is not None else "-")
    console.print(table)
