"""Publishing: MDX rendering, GitHub client and the create_pr task."""

from glossary_spine.publishing.create_pr import (
    CacheStrategy,
    CreatePrResult,
    commit_message,
    create_pr,
    render_entry_mdx,
)
from glossary_spine.publishing.github import GitHubClient, SourceControl
from glossary_spine.publishing.mdx import PublishableEntry, build_frontmatter, check_publishable, render_mdx

__all__ = [
    "CacheStrategy",
    "CreatePrResult",
    "commit_message",
    "create_pr",
    "render_entry_mdx",
    "GitHubClient",
    "SourceControl",
    "PublishableEntry",
    "build_frontmatter",
    "check_publishable",
    "render_mdx",
]
