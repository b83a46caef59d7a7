"""
Shared pytest fixtures and configuration for glossary-spine tests.

This module provides:
- Settings / logging-context cleanup for test isolation
- An in-memory entry store (engine, session, repository)
- Sample entries in every state the publishing task distinguishes
- ``FakeGitHub``, a recording stand-in for the GitHub client

Usage:
    Fixtures are auto-discovered by pytest::

        def test_something(repository, make_entry, fake_github):
            repository.add(make_entry("Customer Auth"))
"""

from __future__ import annotations

import datetime
from typing import Any

import pytest

from glossary_spine.core.errors import SourceControlError
from glossary_spine.core.models import Entry
from glossary_spine.core.orm import GlossarySession, create_glossary_engine, init_schema
from glossary_spine.core.repositories import EntryRepository
from glossary_spine.core.settings import GlossarySettings, clear_settings_cache
from glossary_spine.framework.logging import clear_context

# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    """Drop cached settings and logging context around every test."""
    for var in ("GITHUB_PERSONAL_ACCESS_TOKEN", "GLOSSARY_GITHUB_TOKEN", "GLOSSARY_DATABASE_URL"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    clear_context()
    yield
    clear_settings_cache()
    clear_context()


# =============================================================================
# Entry store
# =============================================================================


@pytest.fixture
def engine():
    """In-memory SQLite engine with the schema created."""
    eng = create_glossary_engine("sqlite:///:memory:")
    init_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    with GlossarySession(bind=engine) as sess:
        yield sess


@pytest.fixture
def repository(session) -> EntryRepository:
    return EntryRepository(session)


@pytest.fixture
def settings() -> GlossarySettings:
    return GlossarySettings(
        _env_file=None,
        database_url="sqlite:///:memory:",
        github_token="ghp_test",
        github_owner="acme",
        github_repo="docs",
    )


# =============================================================================
# Sample data
# =============================================================================

UPDATED_AT = datetime.datetime(2024, 11, 20, 10, 0, 0, tzinfo=datetime.UTC)

SAMPLE_TAKEAWAYS: dict[str, Any] = {
    "tldr": "Customer auth verifies who is calling an API on behalf of an end customer.",
    "definitionAndStructure": [
        {"key": "Identity", "value": "The end customer, not the integrating developer"},
        {"key": "Credential", "value": "Session token or OAuth access token"},
    ],
    "historicalContext": [
        {"key": "Introduced", "value": "Early 2000s"},
        {"key": "Origin", "value": "Web Services"},
    ],
    "usageInAPIs": {
        "tags": ["authentication", "security"],
        "description": "Gates every request that reads or changes customer data.",
    },
    "bestPractices": [
        "Rotate tokens regularly",
        "Scope tokens to the minimum required permissions",
    ],
    "recommendedReading": [
        {"title": "OAuth 2.0 Simplified", "url": "https://example.com/oauth"},
    ],
    "didYouKnow": "Most API breaches start with a leaked customer token.",
}

SAMPLE_BODY = "## What is Customer Auth?\n\nCustomer auth is...\n"


@pytest.fixture
def make_entry():
    """Factory for :class:`Entry` objects; keyword overrides win."""

    def _make(term: str = "Customer Auth", **overrides: Any) -> Entry:
        data: dict[str, Any] = {
            "input_term": term,
            "meta_title": f"{term}: Definition & Best Practices",
            "meta_description": f"Learn what {term} means for APIs.",
            "meta_h1": f"What is {term}?",
            "categories": ["api-security"],
            "takeaways": SAMPLE_TAKEAWAYS,
            "faq": [{"question": f"Why does {term} matter?", "answer": "It protects customer data."}],
            "dynamic_sections_content": SAMPLE_BODY,
            "updated_at": UPDATED_AT,
        }
        data.update(overrides)
        return Entry.model_validate(data)

    return _make


# =============================================================================
# GitHub stand-in
# =============================================================================


class FakeGitHub:
    """Records every call the publishing task makes, in order.

    ``existing_refs`` seeds the refs returned by ``list_matching_refs``;
    ``fail_on`` maps a method name to the exception it raises.
    """

    def __init__(
        self,
        *,
        base_sha: str = "abc123",
        existing_refs: list[str] | None = None,
        existing_file_sha: str | None = None,
        html_url: str = "https://github.com/acme/docs/pull/42",
        fail_on: dict[str, Exception] | None = None,
    ) -> None:
        self.base_sha = base_sha
        self.existing_refs = existing_refs or []
        self.existing_file_sha = existing_file_sha
        self.html_url = html_url
        self.fail_on = fail_on or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def _record(self, name: str, **kwargs: Any) -> None:
        self.calls.append((name, kwargs))
        if name in self.fail_on:
            raise self.fail_on[name]

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def kwargs_for(self, name: str) -> dict[str, Any]:
        return next(kwargs for call, kwargs in self.calls if call == name)

    def get_ref_sha(self, ref: str) -> str:
        self._record("get_ref_sha", ref=ref)
        return self.base_sha

    def list_matching_refs(self, ref: str) -> list[dict[str, Any]]:
        self._record("list_matching_refs", ref=ref)
        prefix = f"refs/{ref}"
        return [{"ref": r, "object": {"sha": "old"}} for r in self.existing_refs if r.startswith(prefix)]

    def delete_ref(self, ref: str) -> None:
        self._record("delete_ref", ref=ref)

    def create_ref(self, ref: str, sha: str) -> dict[str, Any]:
        self._record("create_ref", ref=ref, sha=sha)
        return {"ref": ref, "object": {"sha": sha}}

    def get_file_sha(self, path: str, *, ref: str) -> str | None:
        self._record("get_file_sha", path=path, ref=ref)
        return self.existing_file_sha

    def create_or_update_file(
        self,
        path: str,
        *,
        message: str,
        content: bytes,
        branch: str,
        sha: str | None = None,
    ) -> dict[str, Any]:
        self._record("create_or_update_file", path=path, message=message, content=content, branch=branch, sha=sha)
        return {"content": {"path": path}}

    def create_pull_request(self, *, title: str, head: str, base: str, body: str) -> dict[str, Any]:
        self._record("create_pull_request", title=title, head=head, base=base, body=body)
        return {"number": 42, "html_url": self.html_url}

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def make_github():
    """Build a :class:`FakeGitHub` with custom refs, file SHA or failures."""
    return FakeGitHub


@pytest.fixture
def server_error() -> SourceControlError:
    return SourceControlError("GitHub returned 500", http_status=500, url="https://api.github.com/x")
