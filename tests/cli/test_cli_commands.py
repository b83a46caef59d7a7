"""Tests for glossary_spine.cli — command smoke tests via CliRunner.

Each test points GLOSSARY_DATABASE_URL at a temporary SQLite file; the
GitHub client is replaced with the recording fake from conftest.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from glossary_spine import __version__
from glossary_spine.cli.app import app
from glossary_spine.core.orm import session_scope
from glossary_spine.core.repositories import EntryRepository

runner = CliRunner()

GITHUB_FACTORY = "glossary_spine.publishing.create_pr.GitHubClient.from_settings"


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'glossary.db'}"
    monkeypatch.setenv("GLOSSARY_DATABASE_URL", url)
    monkeypatch.setenv("GLOSSARY_GITHUB_TOKEN", "ghp_test")
    monkeypatch.setenv("GLOSSARY_GITHUB_OWNER", "acme")
    monkeypatch.setenv("GLOSSARY_GITHUB_REPO", "docs")
    return url


@pytest.fixture
def seed(database_url, make_entry):
    def _seed(term: str = "Customer Auth", **overrides):
        with session_scope(database_url, create_schema=True) as session:
            return EntryRepository(session).add(make_entry(term, **overrides))

    return _seed


def _stored(database_url: str, term: str):
    with session_scope(database_url) as session:
        return EntryRepository(session).find_by_term(term)


# ─── Root ────────────────────────────────────────────────────────────────


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "glossary-spine" in result.output

    def test_help_lists_groups(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for group in ("publish", "entries", "db", "config"):
            assert group in result.output

    def test_version_attribute(self):
        assert __version__


# ─── Publish commands ────────────────────────────────────────────────────


class TestPublishCLI:
    def test_create_pr(self, seed, database_url, fake_github):
        seed()
        with patch(GITHUB_FACTORY, return_value=fake_github):
            result = runner.invoke(app, ["publish", "create-pr", "Customer Auth"])

        assert result.exit_code == 0, result.output
        assert "Customer Auth" in result.output
        assert _stored(database_url, "Customer Auth").github_pr_url == fake_github.html_url

    def test_create_pr_json(self, seed, fake_github):
        seed()
        with patch(GITHUB_FACTORY, return_value=fake_github):
            result = runner.invoke(app, ["publish", "create-pr", "Customer Auth", "--json"])

        assert result.exit_code == 0, result.output
        assert '"cached": false' in result.stdout
        assert fake_github.html_url in result.stdout

    def test_create_pr_cache_hit(self, seed, fake_github):
        seed(github_pr_url="https://github.com/acme/docs/pull/1")
        with patch(GITHUB_FACTORY, return_value=fake_github):
            result = runner.invoke(app, ["publish", "create-pr", "Customer Auth"])

        assert result.exit_code == 0
        assert "Found existing PR" in result.output
        assert fake_github.calls == []

    def test_create_pr_revalidate(self, seed, database_url, fake_github):
        seed(github_pr_url="https://github.com/acme/docs/pull/1")
        with patch(GITHUB_FACTORY, return_value=fake_github):
            result = runner.invoke(app, ["publish", "create-pr", "Customer Auth", "--on-cache-hit", "revalidate"])

        assert result.exit_code == 0
        assert "create_pull_request" in fake_github.call_names
        assert _stored(database_url, "Customer Auth").github_pr_url == fake_github.html_url

    def test_create_pr_abort_exits_1(self, seed, fake_github):
        seed(dynamic_sections_content=None)
        with patch(GITHUB_FACTORY, return_value=fake_github):
            result = runner.invoke(app, ["publish", "create-pr", "Customer Auth"])

        assert result.exit_code == 1
        assert fake_github.calls == []

    def test_create_pr_bad_strategy_exits_1(self, database_url):
        result = runner.invoke(app, ["publish", "create-pr", "Customer Auth", "--on-cache-hit", "always"])
        assert result.exit_code == 1

    def test_render_to_stdout(self, seed):
        seed()
        result = runner.invoke(app, ["publish", "render", "Customer Auth"])

        assert result.exit_code == 0
        assert result.stdout.startswith("---\n")
        assert "slug: customer-auth" in result.stdout

    def test_render_to_file(self, seed, tmp_path):
        seed()
        out = tmp_path / "out" / "customer-auth.mdx"
        result = runner.invoke(app, ["publish", "render", "Customer Auth", "--output", str(out)])

        assert result.exit_code == 0
        frontmatter = yaml.safe_load(out.read_text(encoding="utf-8").split("---\n")[1])
        assert frontmatter["term"] == "Customer Auth"

    def test_render_missing_entry(self, seed):
        seed()
        result = runner.invoke(app, ["publish", "render", "Nope"])
        assert result.exit_code == 1


# ─── Entries commands ────────────────────────────────────────────────────


class TestEntriesCLI:
    def test_show(self, seed):
        seed()
        result = runner.invoke(app, ["entries", "show", "Customer Auth", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["input_term"] == "Customer Auth"
        assert data["takeaways"]["tldr"].startswith("Customer auth")

    def test_show_missing(self, seed):
        seed()
        result = runner.invoke(app, ["entries", "show", "Nope"])
        assert result.exit_code == 1

    def test_list(self, seed):
        seed("Webhook")
        seed("Rate Limit")
        result = runner.invoke(app, ["entries", "list", "--json"])
        assert result.exit_code == 0
        assert [e["input_term"] for e in json.loads(result.stdout)] == ["Webhook", "Rate Limit"]

    def test_list_table(self, seed):
        seed("Webhook")
        result = runner.invoke(app, ["entries", "list"])
        assert result.exit_code == 0
        assert "Webhook" in result.output

    def test_import_yaml_list(self, tmp_path, database_url):
        source = tmp_path / "entries.yaml"
        source.write_text(
            yaml.safe_dump(
                [
                    {"input_term": "Webhook", "takeaways": {"tldr": "Push callbacks."}},
                    {"input_term": "Idempotency", "dynamic_sections_content": "## Body\n"},
                ]
            ),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["entries", "import", str(source)])

        assert result.exit_code == 0, result.output
        assert "Imported 2 entries" in result.output
        assert _stored(database_url, "Webhook").takeaways["tldr"] == "Push callbacks."

    def test_import_json_mapping(self, tmp_path, database_url):
        source = tmp_path / "entry.json"
        source.write_text(json.dumps({"input_term": "Webhook"}), encoding="utf-8")

        result = runner.invoke(app, ["entries", "import", str(source)])

        assert result.exit_code == 0
        assert "Imported 1 entry" in result.output

    def test_import_invalid(self, tmp_path, database_url):
        source = tmp_path / "bad.yaml"
        source.write_text("- meta_title: no term\n", encoding="utf-8")
        result = runner.invoke(app, ["entries", "import", str(source)])
        assert result.exit_code == 1


# ─── DB and config commands ──────────────────────────────────────────────


class TestDbCLI:
    def test_init(self, tmp_path, database_url):
        result = runner.invoke(app, ["db", "init", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["tables"] == ["glossary_entries"]
        assert (tmp_path / "glossary.db").exists()


class TestConfigCLI:
    def test_show_json_masks_token(self, database_url):
        result = runner.invoke(app, ["config", "show", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["github_owner"] == "acme"
        assert "ghp_test" not in result.stdout

    def test_show_table(self, database_url):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "ghp_test" not in result.output
