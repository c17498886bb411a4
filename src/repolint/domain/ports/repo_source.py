"""Port: repository source — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repolint.domain.entities import RepoPage, RepositoryDescriptor, TreeListing


class RepoSource(Protocol):
    """Abstract contract for reading an account's repositories."""

    async def verify_credentials(self) -> str:
        """Check the configured token and return the authenticated login."""
        ...

    async def list_repositories(self, account: str, page: int, per_page: int) -> RepoPage:
        """Return one page of the account's repository listing."""
        ...

    async def fetch_tree(self, account: str, repo: RepositoryDescriptor) -> TreeListing:
        """Return the recursive blob listing of the default branch."""
        ...

    async def fetch_file_content(
        self, account: str, repo: RepositoryDescriptor, path: str
    ) -> str:
        """Return the decoded text content of a single file."""
        ...
