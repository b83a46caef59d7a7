"""Deterministic names derived from a glossary input term.

All functions are pure: the same term always yields the same file stem,
branch, repository path and slug.

    >>> term_file_stem("Customer Auth")
    'customer-auth'
    >>> branch_name("Customer Auth", prefix="glossary/add-")
    'glossary/add-customer-auth'
    >>> content_path("Customer Auth", content_dir="apps/www/content/glossary")
    'apps/www/content/glossary/customer-auth.mdx'
    >>> slugify("OAuth 2.0 (Auth Code)")
    'oauth-20-auth-code'
"""

from __future__ import annotations

import re

_WHITESPACE_RUN = re.compile(r"\s+")
# Anything that is not a word character, hyphen or space is dropped from slugs.
_SLUG_STRIP = re.compile(r"[^\w\- ]", re.UNICODE)

MDX_SUFFIX = ".mdx"


def term_file_stem(term: str) -> str:
    """Replace each whitespace run with a single hyphen, then lowercase."""
    return _WHITESPACE_RUN.sub("-", term).lower()


def branch_name(term: str, *, prefix: str) -> str:
    return f"{prefix}{term_file_stem(term)}"


def content_path(term: str, *, content_dir: str) -> str:
    filename = f"{term_file_stem(term)}{MDX_SUFFIX}"
    content_dir = content_dir.strip("/")
    return f"{content_dir}/{filename}" if content_dir else filename


def slugify(term: str) -> str:
    """GitHub-style heading slug: lowercase, strip punctuation, spaces to hyphens.

    Unlike :func:`term_file_stem`, every single space becomes a hyphen, so
    ``"a  b"`` slugs to ``"a--b"``.
    """
    return _SLUG_STRIP.sub("", term.lower()).replace(" ", "-")
