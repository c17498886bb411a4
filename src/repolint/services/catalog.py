"""Catalog fetcher — paginated repository listing with skip filters."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator, Callable

from repolint.domain.entities import RepositoryDescriptor
from repolint.domain.exceptions import CatalogListingError, CatalogPageError
from repolint.domain.ports.repo_source import RepoSource
from repolint.services.session import ScanSession

logger = logging.getLogger(__name__)

# A month is counted as 32 days so the threshold never undershoots.
_DAYS_PER_MONTH = 32


@dataclass(frozen=True, slots=True)
class CatalogFilters:
    """Which repositories to leave out of a scan."""

    skip_forks: bool = True
    skip_archived: bool = True
    skip_inactive: bool = True
    min_stars: int = 0
    inactivity_months: int = 6

    @property
    def inactivity_threshold(self) -> timedelta:
        return timedelta(hours=self.inactivity_months * _DAYS_PER_MONTH * 24)


def skip_reason(
    repo: RepositoryDescriptor, filters: CatalogFilters, now: datetime
) -> str | None:
    """Return why *repo* is skipped, or ``None`` to keep it.

    Checks run in a fixed order and stop at the first match.
    """
    if filters.skip_forks and repo.fork:
        return "fork"
    if filters.skip_archived and repo.archived:
        return "archived"
    if repo.stars < filters.min_stars:
        return f"{repo.stars} stars < {filters.min_stars}"
    if filters.skip_inactive:
        if repo.pushed_at is None:
            return "never pushed"
        if now - repo.pushed_at > filters.inactivity_threshold:
            return f"inactive since {repo.pushed_at:%Y-%m-%d}"
    return None


async def iter_repositories(
    source: RepoSource,
    session: ScanSession,
    filters: CatalogFilters,
    per_page: int = 100,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> AsyncIterator[RepositoryDescriptor]:
    """Yield the account's repositories that pass *filters*, page by page.

    A page after the first one that fails with an HTTP status and advertises
    no next page is treated as the end of the list. Rate-limit and credential
    errors propagate unchanged; any other failure raises
    :class:`CatalogListingError`.
    """
    page = 1
    while True:
        session.count_request()
        try:
            result = await source.list_repositories(session.account, page, per_page)
        except CatalogPageError as exc:
            if page > 1 and exc.ends_listing:
                logger.debug("Treating failed page %d as end of list: %s", page, exc)
                return
            raise CatalogListingError(str(exc)) from exc

        logger.debug("Fetched %d repo names (page %d)", len(result.repositories), page)
        now = clock()
        for repo in result.repositories:
            reason = skip_reason(repo, filters, now)
            if reason is not None:
                logger.debug("Skipping %s/%s: %s", session.account, repo.name, reason)
                continue
            yield repo

        if not result.next_page:
            return
        page = result.next_page
