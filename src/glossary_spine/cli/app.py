"""
Root Typer application for the glossary-spine CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="glossary-spine",
    help="glossary-spine — publish glossary entries as documentation pull requests.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("glossary-spine")
        except PackageNotFoundError:
            from glossary_spine import __version__ as v
        typer.echo(f"glossary-spine {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    log_format: str | None = typer.Option(None, "--log-format", help="console or json."),
) -> None:
    """glossary-spine CLI — render and publish glossary entries."""
    from glossary_spine.core.settings import get_settings
    from glossary_spine.framework.logging import configure_logging

    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        format=log_format or settings.log_format,
        force=True,
    )


# ── Sub-command registration ─────────────────────────────────────────────

from glossary_spine.cli.config import app as config_app  # noqa: E402
from glossary_spine.cli.db import app as db_app  # noqa: E402
from glossary_spine.cli.entries import app as entries_app  # noqa: E402
from glossary_spine.cli.publish import app as publish_app  # noqa: E402

app.add_typer(publish_app, name="publish", help="Render entries and open pull requests.")
app.add_typer(entries_app, name="entries", help="Inspect and import glossary entries.")
app.add_typer(db_app, name="db", help="Database operations.")
app.add_typer(config_app, name="config", help="Configuration inspection.")
