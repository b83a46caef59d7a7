"""
CLI: ``glossary-spine publish`` — render entries and open pull requests.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from glossary_spine.cli.utils import console, err_console, fail, open_session, output_data

app = typer.Typer(no_args_is_help=True)


@app.command("create-pr")
def create_pr_cmd(
    term: str = typer.Argument(..., help="Glossary input term, e.g. 'Customer Auth'"),
    on_cache_hit: str = typer.Option(
        "stale",
        "--on-cache-hit",
        help="stale: reuse an existing PR.  revalidate: publish again.",
    ),
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Publish the entry for TERM as a pull request and store its URL."""
    from glossary_spine.core.errors import BadParamsError
    from glossary_spine.framework import get_runner

    params = {"term": term, "on_cache_hit": on_cache_hit, "database": database}
    try:
        result = get_runner().run("create_pr", params)
    except BadParamsError as e:
        raise fail(e) from None

    if not result.succeeded:
        err_console.print(f"[bold red]Failed[/bold red] ({result.error_type}): {escape(result.error or '')}", highlight=False)
        raise typer.Exit(code=1)

    if json_out:
        output_data(result.metrics, as_json=True)
        return

    metrics = result.metrics
    if metrics.get("cached"):
        console.print(f"[yellow]{escape(metrics['message'])}[/yellow]")
    else:
        console.print(f"[green]✓[/green] {escape(metrics['message'])}")
    console.print(f"  [cyan]github_pr_url[/cyan]: {metrics['github_pr_url']}", highlight=False)


@app.command("render")
def render_cmd(
    term: str = typer.Argument(..., help="Glossary input term"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the MDX to this file"),
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
) -> None:
    """Render the MDX document for TERM without touching GitHub."""
    from glossary_spine.core.errors import AbortTaskError
    from glossary_spine.core.repositories import EntryRepository
    from glossary_spine.publishing import render_entry_mdx

    with open_session(database) as session:
        try:
            mdx = render_entry_mdx(term, repository=EntryRepository(session))
        except AbortTaskError as e:
            raise fail(e) from None

    if output is None:
        typer.echo(mdx, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(mdx, encoding="utf-8")
    console.print(f"[green]✓[/green] Wrote {output}")
