"""
Centralized settings for Glossary Spine.

Manifesto:
    One validated, cached settings object instead of ``os.environ`` lookups
    scattered through the task. Values come from ``GLOSSARY_*`` environment
    variables or a ``.env`` file; the GitHub token also honours the
    ``GITHUB_PERSONAL_ACCESS_TOKEN`` variable the publishing job has always
    read.

Examples:
    >>> from glossary_spine.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.github_base_branch
    'main'

Tags:
    glossary-spine, configuration, settings, pydantic, caching

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GlossarySettings(BaseSettings):
    """Glossary Spine configuration.

    All fields can be set via ``GLOSSARY_*`` environment variables (e.g.
    ``GLOSSARY_GITHUB_OWNER=acme``) or through a ``.env`` file.

    Fields
    ──────
    database_url            : SQLAlchemy URL of the entry store
    github_token            : Bearer credential for the GitHub REST API
    github_owner/repo       : Documentation repository that receives PRs
    github_base_branch      : Branch PRs are opened against
    branch_prefix           : Prefix of the per-term branch name
    content_dir             : Directory of glossary MDX files in the repo
    log_level / log_format  : Structlog configuration
    """

    model_config = SettingsConfigDict(
        env_prefix="GLOSSARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ── Database ─────────────────────────────────────────────────
    database_url: str = Field(default="sqlite:///data/glossary.db")
    database_echo: bool = Field(default=False)

    # ── GitHub ───────────────────────────────────────────────────
    github_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("GLOSSARY_GITHUB_TOKEN", "GITHUB_PERSONAL_ACCESS_TOKEN", "github_token"),
    )
    github_api_url: str = Field(default="https://api.github.com")
    github_owner: str = Field(default="", description="Owner of the documentation repository")
    github_repo: str = Field(default="", description="Name of the documentation repository")
    github_base_branch: str = Field(default="main")
    github_timeout_seconds: float = Field(default=30.0)

    # ── Publishing ───────────────────────────────────────────────
    branch_prefix: str = Field(default="glossary/add-")
    content_dir: str = Field(default="apps/www/content/glossary")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("content_dir")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        return value.strip("/")

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, GlossarySettings] = {}


def get_settings(*, env_file: str | None = None, _force_reload: bool = False) -> GlossarySettings:
    """Load, validate, and cache a :class:`GlossarySettings` instance.

    Parameters
    ----------
    env_file:
        Explicit ``.env`` path.  Defaults to ``.env`` in the working directory.
    _force_reload:
        Bypass cache and reload from the environment.
    """
    cache_key = env_file or ""
    if not _force_reload and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    if env_file:
        settings = GlossarySettings(_env_file=env_file)  # type: ignore[call-arg]
    else:
        settings = GlossarySettings()

    _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
