"""Lint-account use case — the main orchestration pipeline.

It depends only on the two ports (:class:`RepoSource` and, through the
checkers, :class:`ToolRunner`) and the pure service modules.  The interface
layer injects concrete adapters at runtime.

Each repository goes through the same strictly ordered steps::

    collect files -> push every file to every checker -> resolve requirements
    -> run checks -> report
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator

from repolint.domain.entities import FileDescriptor, LintWarning, RepositoryDescriptor
from repolint.domain.ports.repo_source import RepoSource
from repolint.services.catalog import CatalogFilters, iter_repositories
from repolint.services.checkers.base import Checker
from repolint.services.checkers.registry import CheckerRegistry
from repolint.services.content_cache import ContentCache
from repolint.services.session import ScanSession
from repolint.services.tree_collector import collect_files

logger = logging.getLogger(__name__)


class LintAccountUseCase:
    """Orchestrates the account → warnings pipeline.

    Parameters
    ----------
    source:
        Adapter that lists repositories and fetches trees and content.
    session:
        Scan session (account, host, request counter).
    registry:
        Enabled checkers; disabling happened before construction.
    cache:
        Content materializer bound to the same session.
    filters:
        Catalog skip filters.
    per_page:
        Catalog page size.
    skip_vendor:
        Drop vendor directories before checkers see any file.
    """

    def __init__(
        self,
        source: RepoSource,
        session: ScanSession,
        registry: CheckerRegistry,
        cache: ContentCache,
        filters: CatalogFilters | None = None,
        per_page: int = 100,
        skip_vendor: bool = True,
    ) -> None:
        self._source = source
        self._session = session
        self._registry = registry
        self._cache = cache
        self._filters = filters or CatalogFilters()
        self._per_page = per_page
        self._skip_vendor = skip_vendor

    # ── Public entry points ─────────────────────────────────────────────

    async def execute(self) -> AsyncIterator[LintWarning]:
        """Lint every catalog repository, yielding warnings as they are produced."""
        async for repo in iter_repositories(
            self._source, self._session, self._filters, self._per_page
        ):
            logger.info("checking %s/%s...", self._session.account, repo.name)
            for warning in await self.lint_repository(repo):
                yield warning
        logger.info("done, %d requests made", self._session.request_count)

    async def lint_repository(self, repo: RepositoryDescriptor) -> list[LintWarning]:
        """Run every enabled checker over one repository."""
        files = await collect_files(
            self._source, self._session, repo, skip_vendor=self._skip_vendor
        )
        checkers = self._registry.items()

        try:
            self._push_files(repo, files, checkers)

            flagged = await self._cache.resolve_all(repo, files)
            logger.debug("%s: %d files, %d materialized", repo.name, len(files), flagged)

            results = await asyncio.gather(
                *(checker.check_files() for _, checker in checkers),
                return_exceptions=True,
            )
        finally:
            self._cache.release(repo)

        label = self._session.repository_label(repo.name)
        warnings: list[LintWarning] = []
        for (name, _), result in zip(checkers, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error("%s: %s: checker failed: %s", repo.name, name, result)
                continue
            warnings.extend(LintWarning(label, name, message) for message in result)
        return warnings

    # ── Requirement declaration ─────────────────────────────────────────

    @staticmethod
    def _push_files(
        repo: RepositoryDescriptor,
        files: list[FileDescriptor],
        checkers: list[tuple[str, Checker]],
    ) -> None:
        """Every checker sees every file before any requirement is resolved."""
        for _, checker in checkers:
            checker.reset(repo)
        for f in files:
            for _, checker in checkers:
                checker.push_file(f)
