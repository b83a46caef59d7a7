"""
Glossary Spine - publishing pipeline for glossary entries.

Packages:
- glossary_spine.core: errors, settings, models, naming, ORM and repositories
- glossary_spine.framework: operation base, registry, runner, logging
- glossary_spine.publishing: MDX rendering, GitHub client, create_pr task
- glossary_spine.cli: Typer command-line interface
"""

__version__ = "0.1.0"
