"""Tests for core.settings module.

Covers:
- GlossarySettings defaults
- GLOSSARY_* environment overrides
- GITHUB_PERSONAL_ACCESS_TOKEN fallback for the token
- get_settings caching
"""

from glossary_spine.core.settings import GlossarySettings, clear_settings_cache, get_settings


class TestDefaults:
    def test_defaults(self):
        s = GlossarySettings(_env_file=None)
        assert s.database_url == "sqlite:///data/glossary.db"
        assert s.github_base_branch == "main"
        assert s.branch_prefix == "glossary/add-"
        assert s.content_dir == "apps/www/content/glossary"
        assert s.github_token is None
        assert s.is_sqlite

    def test_content_dir_slashes_stripped(self):
        s = GlossarySettings(_env_file=None, content_dir="/docs/glossary/")
        assert s.content_dir == "docs/glossary"

    def test_log_level_uppercased(self):
        assert GlossarySettings(_env_file=None, log_level="debug").log_level == "DEBUG"


class TestEnvOverride:
    def test_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("GLOSSARY_GITHUB_OWNER", "acme")
        monkeypatch.setenv("GLOSSARY_GITHUB_BASE_BRANCH", "develop")
        s = GlossarySettings(_env_file=None)
        assert s.github_owner == "acme"
        assert s.github_base_branch == "develop"

    def test_personal_access_token_fallback(self, monkeypatch):
        monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "ghp_secret")
        s = GlossarySettings(_env_file=None)
        assert s.github_token is not None
        assert s.github_token.get_secret_value() == "ghp_secret"

    def test_token_is_masked_in_dump(self, monkeypatch):
        monkeypatch.setenv("GLOSSARY_GITHUB_TOKEN", "ghp_secret")
        s = GlossarySettings(_env_file=None)
        assert "ghp_secret" not in s.model_dump_json()


class TestCaching:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_clear_cache_reloads(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("GLOSSARY_GITHUB_REPO", "docs")
        clear_settings_cache()
        second = get_settings()
        assert second is not first
        assert second.github_repo == "docs"

    def test_force_reload(self, monkeypatch):
        get_settings()
        monkeypatch.setenv("GLOSSARY_GITHUB_REPO", "other")
        assert get_settings(_force_reload=True).github_repo == "other"
