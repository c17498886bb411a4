"""Domain exception hierarchy.

Fatal errors propagate to the entry point, which maps them to an exit code.
Repository, file and checker scoped errors are caught and logged by the
service that owns that scope and never escalate further.
"""

from __future__ import annotations


class RepoLintError(Exception):
    """Base exception for the entire application."""


# ── Fatal: configuration / start-up ─────────────────────────────────────────


class ConfigurationError(RepoLintError):
    """Missing or invalid settings."""


class AuthenticationError(RepoLintError):
    """The API token was rejected (401)."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class RepositoryNotFoundError(RepoLintError):
    """The requested resource does not exist or is not visible (404)."""


class RepositoryAccessDeniedError(RepoLintError):
    """Access to the resource was denied (403)."""


class GitHubRateLimitError(RepoLintError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class CatalogPageError(RepoLintError):
    """Listing one page of repositories failed.

    ``status_code`` is set only when the server answered with an unexpected
    HTTP status; ``has_next_page`` then reflects that response's Link header.
    """

    def __init__(
        self,
        message: str,
        *,
        page: int,
        status_code: int | None = None,
        has_next_page: bool = False,
    ) -> None:
        super().__init__(message)
        self.page = page
        self.status_code = status_code
        self.has_next_page = has_next_page

    @property
    def ends_listing(self) -> bool:
        """The server answered, and advertised no page after this one."""
        return self.status_code is not None and not self.has_next_page


class CatalogListingError(RepoLintError):
    """The repository catalog could not be listed."""


# ── Recoverable: repository / file / checker scope ──────────────────────────


class TreeFetchError(RepoLintError):
    """The file tree of one repository could not be fetched."""


class ContentFetchError(RepoLintError):
    """The content of one file could not be fetched."""


class ExternalToolError(RepoLintError):
    """An external checking tool could not be run."""
