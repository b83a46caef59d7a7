"""
CLI layer for glossary-spine.

Provides a Typer application whose sub-commands delegate to the
publishing task and the entry repository.  This package handles only
terminal transport: argument parsing, coloured output and tables.

Entry point::

    glossary-spine --help
"""

from glossary_spine.cli.app import app

__all__ = ["app"]
