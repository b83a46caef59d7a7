"""Publish a glossary entry by opening a pull request.

Manifesto:
    Publishing is a straight line: read the entry, render MDX, branch,
    commit, open the PR, store its URL.  The only decision is up front:
    an entry that already has a PR URL is returned as-is unless the caller
    asks to revalidate.  Nothing is retried and nothing is rolled back;
    a failure part-way leaves whatever remote state was already created.

Flow::

    find entry ──► PR URL + stale? ──yes──► return cached entry
                        │ no
                        ▼
    check body + takeaways (abort if missing)
                        ▼
    render MDX ► tip of main ► delete stale branch ► create branch
                        ▼
    commit file ► open PR ► store html_url ► return entry

Tags:
    glossary-spine, publishing, github, pull-request, task

Doc-Types:
    api-reference
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from glossary_spine.core.errors import GlossaryError
from glossary_spine.core.models import Entry
from glossary_spine.core.naming import branch_name, content_path
from glossary_spine.core.repositories import EntryRepository
from glossary_spine.core.settings import GlossarySettings
from glossary_spine.framework.logging import bind_context, get_logger, log_step
from glossary_spine.publishing.github import GitHubClient, SourceControl
from glossary_spine.publishing.mdx import check_publishable, render_mdx

log = get_logger(__name__)


class CacheStrategy(str, Enum):
    """What to do when an entry already has a publish URL."""

    STALE = "stale"  # reuse the existing PR
    REVALIDATE = "revalidate"  # publish again


@dataclass
class CreatePrResult:
    entry: Entry
    message: str
    cached: bool = False

    @property
    def github_pr_url(self) -> str | None:
        return self.entry.github_pr_url


def commit_message(term: str) -> str:
    return f"feat(glossary): Add {term}.mdx to glossary"


def render_entry_mdx(term: str, *, repository: EntryRepository) -> str:
    """Render the MDX document for *term* without touching GitHub."""
    return render_mdx(check_publishable(repository.find_by_term(term), term))


def create_pr(
    term: str,
    *,
    repository: EntryRepository,
    settings: GlossarySettings,
    on_cache_hit: CacheStrategy | str = CacheStrategy.STALE,
    github: SourceControl | None = None,
) -> CreatePrResult:
    """Publish the entry for *term* as a pull request.

    Args:
        term: Glossary input term.
        repository: Entry store.
        settings: Target repository, base branch, branch prefix, content dir.
        on_cache_hit: ``stale`` returns an already-published entry untouched;
            ``revalidate`` publishes again.
        github: Source-control client.  Built from *settings* (and closed
            afterwards) when omitted.

    Raises:
        AbortTaskError: The entry, its body content or its takeaways are
            missing, or the stored takeaways are malformed.  Raised before
            any remote call.  A cached entry is returned without checking.
        SourceControlError / NetworkError: A GitHub call failed.
    """
    strategy = CacheStrategy(on_cache_hit)
    bind_context(term=term)

    existing = repository.find_by_term(term)
    if existing is not None and existing.github_pr_url and strategy is CacheStrategy.STALE:
        log.info("create_pr.cache_hit", github_pr_url=existing.github_pr_url)
        return CreatePrResult(entry=existing, message=f"Found existing PR for {term}.mdx", cached=True)

    # ==== 1. Prepare MDX file ====
    publishable = check_publishable(existing, term)
    mdx = render_mdx(publishable)
    branch = branch_name(term, prefix=settings.branch_prefix)
    path = content_path(term, content_dir=settings.content_dir)
    log.info("create_pr.mdx_rendered", path=path, size=len(mdx))

    # ==== 2. Branch, commit and pull request ====
    owns_client = github is None
    client: SourceControl = github if github is not None else GitHubClient.from_settings(settings)
    try:
        pr = _publish(client, term=term, mdx=mdx, branch=branch, path=path, base=settings.github_base_branch)
    finally:
        if owns_client:
            client.close()

    pr_url = pr["html_url"]
    with log_step("create_pr.store_url", github_pr_url=pr_url):
        repository.set_github_pr_url(term, pr_url)

    updated = repository.find_by_term(term)
    if updated is None:
        # the row was read moments ago; only a concurrent delete gets here
        updated = publishable.entry.model_copy(update={"github_pr_url": pr_url})
    return CreatePrResult(entry=updated, message=commit_message(term))


def _publish(client: SourceControl, *, term: str, mdx: str, branch: str, path: str, base: str) -> dict:
    with log_step("create_pr.resolve_base", base=base) as timer:
        base_sha = client.get_ref_sha(f"heads/{base}")
        timer.add_metric("sha", base_sha)

    with log_step("create_pr.check_branch", branch=branch):
        branch_ref = f"refs/heads/{branch}"
        matching = client.list_matching_refs(f"heads/{branch}")
        branch_exists = any(ref.get("ref") == branch_ref for ref in matching)

    if branch_exists:
        log.warning("create_pr.duplicate_branch", branch=branch)
        try:
            client.delete_ref(f"heads/{branch}")
            log.info("create_pr.branch_deleted", branch=branch)
        except GlossaryError as e:
            log.error("create_pr.branch_delete_failed", branch=branch, error=str(e))

    with log_step("create_pr.create_branch", branch=branch):
        client.create_ref(branch_ref, base_sha)

    with log_step("create_pr.commit_file", branch=branch, path=path):
        existing_sha = client.get_file_sha(path, ref=branch)
        client.create_or_update_file(
            path,
            message=commit_message(term),
            content=mdx.encode("utf-8"),
            branch=branch,
            sha=existing_sha,
        )

    with log_step("create_pr.open_pull_request", branch=branch) as timer:
        pr = client.create_pull_request(
            title=f"Add {term} to API documentation",
            head=branch,
            base=base,
            body=f"This PR adds the {term}.mdx file to the API documentation.",
        )
        timer.add_metric("github_pr_url", pr.get("html_url"))

    return pr
