"""Registered publishing operations.

``create_pr`` runs with ``RetryPolicy(max_attempts=0)``: one attempt, and a
failure is reported, never retried.
"""

from datetime import UTC, datetime

from glossary_spine.core.orm import session_scope
from glossary_spine.core.repositories import EntryRepository
from glossary_spine.core.settings import get_settings
from glossary_spine.framework.operations import Operation, OperationResult, OperationStatus, RetryPolicy
from glossary_spine.framework.params import OperationSpec, ParamDef, enum_value, non_blank
from glossary_spine.framework.registry import register_operation
from glossary_spine.publishing.create_pr import CacheStrategy, create_pr


@register_operation("create_pr")
class CreatePrOperation(Operation):
    """Open (or reuse) the documentation pull request for one glossary term."""

    name = "create_pr"
    description = "Publish a glossary entry as a pull request against the documentation repository"
    retry = RetryPolicy(max_attempts=0)
    spec = OperationSpec(
        required_params={
            "term": ParamDef(
                name="term",
                type=str,
                description="Glossary input term",
                validator=non_blank,
                error_message="term must not be blank",
            ),
        },
        optional_params={
            "on_cache_hit": ParamDef(
                name="on_cache_hit",
                type=str,
                description="stale (reuse an existing PR) or revalidate (publish again)",
                default=CacheStrategy.STALE.value,
                validator=enum_value(CacheStrategy),
                error_message="on_cache_hit must be one of: stale, revalidate",
            ),
            "database": ParamDef(
                name="database",
                type=str,
                description="SQLAlchemy URL overriding GLOSSARY_DATABASE_URL",
            ),
        },
        description="Render the entry to MDX and open a pull request for it.",
    )

    def run(self) -> OperationResult:
        started_at = datetime.now(UTC)
        settings = get_settings()

        database_url = self.params.get("database") or settings.database_url

        with session_scope(database_url, echo=settings.database_echo) as session:
            result = create_pr(
                self.params["term"],
                repository=EntryRepository(session),
                settings=settings,
                on_cache_hit=self.params.get("on_cache_hit", CacheStrategy.STALE),
            )

        return OperationResult(
            status=OperationStatus.COMPLETED,
            started_at=started_at,
            completed_at=datetime.now(UTC),
            metrics={
                "message": result.message,
                "cached": result.cached,
                "entry_id": result.entry.id,
                "input_term": result.entry.input_term,
                "github_pr_url": result.github_pr_url,
            },
        )
