"""GitHub REST client for publishing glossary files.

Wraps the handful of REST v3 endpoints the publishing task needs:

=====================  ===============================================
Method                 Endpoint
=====================  ===============================================
get_ref_sha            GET    /repos/{o}/{r}/git/ref/{ref}
list_matching_refs     GET    /repos/{o}/{r}/git/matching-refs/{ref}
delete_ref             DELETE /repos/{o}/{r}/git/refs/{ref}
create_ref             POST   /repos/{o}/{r}/git/refs
get_file_sha           GET    /repos/{o}/{r}/contents/{path}?ref=...
create_or_update_file  PUT    /repos/{o}/{r}/contents/{path}
create_pull_request    POST   /repos/{o}/{r}/pulls
=====================  ===============================================

Requests go through a single ``httpx.Client`` with a bearer token and no
transport retries.  Non-2xx responses raise :class:`SourceControlError`;
transport failures raise :class:`NetworkError`.

Tags:
    glossary-spine, publishing, github, httpx, rest-client

Doc-Types:
    api-reference
"""

from __future__ import annotations

import base64
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from glossary_spine.core.errors import MissingConfigError, NetworkError, SourceControlError
from glossary_spine.core.settings import GlossarySettings
from glossary_spine.framework.logging import get_logger

log = get_logger(__name__)

GITHUB_API_VERSION = "2022-11-28"


class SourceControl(Protocol):
    """What the publishing task needs from a source-control host."""

    def get_ref_sha(self, ref: str) -> str: ...

    def list_matching_refs(self, ref: str) -> list[dict[str, Any]]: ...

    def delete_ref(self, ref: str) -> None: ...

    def create_ref(self, ref: str, sha: str) -> dict[str, Any]: ...

    def get_file_sha(self, path: str, *, ref: str) -> str | None: ...

    def create_or_update_file(
        self,
        path: str,
        *,
        message: str,
        content: bytes,
        branch: str,
        sha: str | None = None,
    ) -> dict[str, Any]: ...

    def create_pull_request(self, *, title: str, head: str, base: str, body: str) -> dict[str, Any]: ...

    def close(self) -> None: ...


class GitHubClient:
    """Synchronous GitHub REST client scoped to one repository.

    Parameters
    ----------
    token:
        Personal access token sent as ``Authorization: Bearer``.
    owner, repo:
        Repository that receives branches, commits and pull requests.
    api_url:
        API root, ``https://api.github.com`` unless using GitHub Enterprise.
    timeout:
        Per-request timeout in seconds.
    transport:
        Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        *,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self._client = httpx.Client(
            base_url=api_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: GlossarySettings, **kwargs: Any) -> GitHubClient:
        """Build a client from settings, failing fast on missing configuration."""
        if settings.github_token is None or not settings.github_token.get_secret_value():
            raise MissingConfigError(
                "github_token",
                "Missing required configuration: set GITHUB_PERSONAL_ACCESS_TOKEN or GLOSSARY_GITHUB_TOKEN",
            )
        if not settings.github_owner:
            raise MissingConfigError("github_owner")
        if not settings.github_repo:
            raise MissingConfigError("github_repo")
        return cls(
            settings.github_token.get_secret_value(),
            settings.github_owner,
            settings.github_repo,
            api_url=settings.github_api_url,
            timeout=settings.github_timeout_seconds,
            **kwargs,
        )

    # -- lifecycle -------------------------------------------------------------

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- transport -------------------------------------------------------------

    def _repo_path(self, suffix: str) -> str:
        return f"/repos/{quote(self.owner, safe='')}/{quote(self.repo, safe='')}/{suffix}"

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise NetworkError(f"GitHub {method} {path} timed out", cause=e).with_context(url=path) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"GitHub {method} {path} failed: {e}", cause=e).with_context(url=path) from e

        log.debug("github.response", method=method, path=path, status=response.status_code)

        if response.is_error:
            raise SourceControlError(
                f"GitHub {method} {path} returned {response.status_code}: {_error_message(response)}",
                http_status=response.status_code,
                url=str(response.request.url),
            )
        return response

    # -- refs ------------------------------------------------------------------

    def get_ref_sha(self, ref: str) -> str:
        """Return the commit SHA a ref (e.g. ``heads/main``) points to."""
        response = self._request("GET", self._repo_path(f"git/ref/{quote(ref, safe='/')}"))
        return response.json()["object"]["sha"]

    def list_matching_refs(self, ref: str) -> list[dict[str, Any]]:
        """List refs starting with *ref* (``heads/glossary/add-x`` matches ``...-x`` and ``...-x-2``)."""
        response = self._request("GET", self._repo_path(f"git/matching-refs/{quote(ref, safe='/')}"))
        return response.json()

    def delete_ref(self, ref: str) -> None:
        self._request("DELETE", self._repo_path(f"git/refs/{quote(ref, safe='/')}"))

    def create_ref(self, ref: str, sha: str) -> dict[str, Any]:
        """Create a fully-qualified ref (``refs/heads/...``) at *sha*."""
        response = self._request("POST", self._repo_path("git/refs"), json={"ref": ref, "sha": sha})
        return response.json()

    # -- contents --------------------------------------------------------------

    def get_file_sha(self, path: str, *, ref: str) -> str | None:
        """Blob SHA of *path* on *ref*, or ``None`` if the file does not exist."""
        try:
            response = self._request(
                "GET",
                self._repo_path(f"contents/{quote(path, safe='/')}"),
                params={"ref": ref},
            )
        except SourceControlError as e:
            if e.http_status == 404:
                return None
            raise
        payload = response.json()
        return payload.get("sha") if isinstance(payload, dict) else None

    def create_or_update_file(
        self,
        path: str,
        *,
        message: str,
        content: bytes,
        branch: str,
        sha: str | None = None,
    ) -> dict[str, Any]:
        """Commit *content* to *path* on *branch*.  *sha* is required when the file exists."""
        body: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": branch,
        }
        if sha is not None:
            body["sha"] = sha
        response = self._request("PUT", self._repo_path(f"contents/{quote(path, safe='/')}"), json=body)
        return response.json()

    # -- pull requests ---------------------------------------------------------

    def create_pull_request(self, *, title: str, head: str, base: str, body: str) -> dict[str, Any]:
        response = self._request(
            "POST",
            self._repo_path("pulls"),
            json={"title": title, "head": head, "base": base, "body": body},
        )
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.reason_phrase
