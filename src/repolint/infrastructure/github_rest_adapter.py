"""GitHub REST API adapter — implements the RepoSource port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from urllib.parse import parse_qs, quote, urlparse

import httpx

from repolint.domain.entities import RepoPage, RepositoryDescriptor, TreeListing
from repolint.domain.exceptions import (
    AuthenticationError,
    CatalogPageError,
    ContentFetchError,
    GitHubRateLimitError,
    RepoLintError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    TreeFetchError,
)

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_RAW_BASE = "https://raw.githubusercontent.com"
_USER_AGENT = "repolint/1.0"

# JSON decode failures are ValueError; unexpected shapes raise the rest.
_MALFORMED = (ValueError, KeyError, TypeError, AttributeError)


class GitHubRestAdapter:
    """Concrete RepoSource backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        *,
        api_url: str = _GITHUB_API,
        raw_url: str = _RAW_BASE,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._raw_url = raw_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": _USER_AGENT,
        }
        self._raw_headers: dict[str, str] = {"User-Agent": _USER_AGENT}
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"
            self._raw_headers["Authorization"] = f"Bearer {token}"

    async def verify_credentials(self) -> str:
        """GET /user → authenticated login."""
        resp = await self._api_get("/user")
        try:
            return str(resp.json()["login"])
        except _MALFORMED as exc:
            raise RepoLintError(f"Unexpected response from /user: {exc!r}") from exc

    async def list_repositories(self, account: str, page: int, per_page: int) -> RepoPage:
        """GET /users/{account}/repos?page=N → RepoPage.

        Rate-limit and credential errors are raised as is so they keep their
        own exit status.
        """
        params = {"per_page": str(per_page), "page": str(page), "type": "owner"}
        try:
            resp = await self._api_get(f"/users/{account}/repos", params=params)
        except (GitHubRateLimitError, AuthenticationError):
            raise
        except _HttpStatusError as exc:
            raise CatalogPageError(
                f"list repos (page={page}): {exc}",
                page=page,
                status_code=exc.response.status_code,
                has_next_page=_next_page(exc.response) is not None,
            ) from exc
        except RepoLintError as exc:
            raise CatalogPageError(f"list repos (page={page}): {exc}", page=page) from exc

        try:
            repositories = [_to_descriptor(item) for item in resp.json()]
        except _MALFORMED as exc:
            raise CatalogPageError(
                f"list repos (page={page}): malformed response: {exc!r}", page=page
            ) from exc
        return RepoPage(repositories=repositories, next_page=_next_page(resp))

    async def fetch_tree(self, account: str, repo: RepositoryDescriptor) -> TreeListing:
        """GET /repos/{account}/{repo}/git/trees/{branch}?recursive=1 → TreeListing."""
        branch = quote(repo.default_branch, safe="")
        try:
            resp = await self._api_get(
                f"/repos/{account}/{repo.name}/git/trees/{branch}",
                params={"recursive": "1"},
            )
        except RepoLintError as exc:
            raise TreeFetchError(f"{account}/{repo.name}: get tree: {exc}") from exc

        try:
            data = resp.json()
            paths = [
                str(item["path"])
                for item in data.get("tree", [])
                if item.get("type", "blob") == "blob"
            ]
            truncated = bool(data.get("truncated", False))
        except _MALFORMED as exc:
            raise TreeFetchError(
                f"{account}/{repo.name}: get tree: malformed response: {exc!r}"
            ) from exc
        return TreeListing(paths=paths, truncated=truncated)

    async def fetch_file_content(
        self, account: str, repo: RepositoryDescriptor, path: str
    ) -> str:
        """Fetch raw file content via raw.githubusercontent.com."""
        raw_url = f"{self._raw_url}/{account}/{repo.name}/{repo.default_branch}/{quote(path)}"
        try:
            resp = await self._client.get(raw_url, headers=self._raw_headers)
        except httpx.HTTPError as exc:
            raise ContentFetchError(f"Network error fetching {raw_url}: {exc}") from exc

        if resp.status_code == 200:
            return resp.text

        if resp.status_code == 404:
            raise ContentFetchError(f"File not found: {path}")

        raise ContentFetchError(
            f"raw.githubusercontent.com returned HTTP {resp.status_code} for {path}"
        )

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._api_url}{endpoint}"
        try:
            resp = await self._client.get(url, headers=self._api_headers, params=params)
        except httpx.HTTPError as exc:
            raise RepoLintError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 401:
            raise AuthenticationError("Bad credentials. Check the configured API token.")

        if resp.status_code == 404:
            raise RepositoryNotFoundError(f"Not found: {url}")

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}."
                )
            raise RepositoryAccessDeniedError(f"Access denied: {url}")

        if resp.status_code == 429:
            raise GitHubRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

        raise _HttpStatusError(
            f"GitHub API returned HTTP {resp.status_code} for {url}", response=resp
        )


class _HttpStatusError(RepoLintError):
    """Unexpected HTTP status; keeps the response for pagination inspection."""

    def __init__(self, message: str, *, response: httpx.Response) -> None:
        super().__init__(message)
        self.response = response


# ── Helpers ─────────────────────────────────────────────────────────────────


def _next_page(resp: httpx.Response) -> int | None:
    """Extract the ``page`` query value of the ``Link: rel="next"`` header."""
    link = resp.links.get("next")
    if not link or "url" not in link:
        return None
    values = parse_qs(urlparse(link["url"]).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


def _parse_timestamp(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable timestamp %r", raw)
        return None


def _to_descriptor(item: dict) -> RepositoryDescriptor:
    return RepositoryDescriptor(
        name=item["name"],
        fork=bool(item.get("fork", False)),
        archived=bool(item.get("archived", False)),
        stars=int(item.get("stargazers_count", 0) or 0),
        pushed_at=_parse_timestamp(item.get("pushed_at")),
        default_branch=item.get("default_branch") or "main",
    )
