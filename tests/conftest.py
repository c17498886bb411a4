from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

import pytest

from repolint.domain.entities import (
    RepoPage,
    RepositoryDescriptor,
    ToolResult,
    TreeListing,
)
from repolint.domain.exceptions import ContentFetchError, ExternalToolError, TreeFetchError
from repolint.services.session import ScanSession

NOW = datetime(2026, 10, 1, tzinfo=timezone.utc)


class FakeRepoSource:
    """In-memory RepoSource that counts every content fetch per path."""

    def __init__(
        self,
        trees: dict[str, list[str]] | None = None,
        contents: dict[tuple[str, str], str] | None = None,
        pages: list[RepoPage] | None = None,
    ) -> None:
        self.trees = trees or {}
        self.contents = contents or {}
        self.pages = pages or []
        self.truncated: set[str] = set()
        self.fetches: Counter[str] = Counter()

    async def verify_credentials(self) -> str:
        return "tester"

    async def list_repositories(self, account: str, page: int, per_page: int) -> RepoPage:
        return self.pages[page - 1]

    async def fetch_tree(self, account: str, repo: RepositoryDescriptor) -> TreeListing:
        if repo.name not in self.trees:
            raise TreeFetchError(f"{repo.name}: no tree")
        return TreeListing(paths=list(self.trees[repo.name]), truncated=repo.name in self.truncated)

    async def fetch_file_content(
        self, account: str, repo: RepositoryDescriptor, path: str
    ) -> str:
        self.fetches[path] += 1
        try:
            return self.contents[(repo.name, path)]
        except KeyError:
            raise ContentFetchError(f"File not found: {path}") from None


class FakeToolRunner:
    """ToolRunner that records argv and replays canned results per executable."""

    def __init__(self, results: dict[str, ToolResult | Exception] | None = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[str, ...]] = []

    async def run(self, argv: Sequence[str], *, timeout: float | None = None) -> ToolResult:
        argv = tuple(argv)
        self.calls.append(argv)
        outcome = self.results.get(argv[0])
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            raise ExternalToolError(f"can't run {argv[0]}: not installed")
        return outcome


def repo(name: str = "demo", **kwargs: object) -> RepositoryDescriptor:
    kwargs.setdefault("pushed_at", NOW)
    return RepositoryDescriptor(name=name, **kwargs)  # type: ignore[arg-type]


@pytest.fixture
def session() -> ScanSession:
    return ScanSession(account="octo")


@pytest.fixture
def scratch(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path
