"""Tree collector — flatten a repository tree into file descriptors."""

from __future__ import annotations

import logging
import re

from repolint.domain.entities import FileDescriptor, RepositoryDescriptor
from repolint.domain.exceptions import TreeFetchError
from repolint.domain.ports.repo_source import RepoSource
from repolint.services.session import ScanSession

logger = logging.getLogger(__name__)

VENDOR_DIRS: tuple[str, ...] = (
    "vendor",
    "node_modules",
    "cargo-vendor",
    "third[-_]party",
)

_VENDOR_RE = re.compile(r"(?:^|/)(?:" + "|".join(VENDOR_DIRS) + r")/")


def is_vendored(path: str) -> bool:
    """Return *True* if any directory segment of *path* is a vendor directory."""
    return _VENDOR_RE.search(path) is not None


async def collect_files(
    source: RepoSource,
    session: ScanSession,
    repo: RepositoryDescriptor,
    *,
    skip_vendor: bool = True,
) -> list[FileDescriptor]:
    """Return descriptors for every blob on the default branch.

    A tree that cannot be fetched yields an empty list; the scan goes on.
    """
    session.count_request()
    try:
        listing = await source.fetch_tree(session.account, repo)
    except TreeFetchError as exc:
        logger.error("%s: can't list files: %s", repo.name, exc)
        return []

    if listing.truncated:
        logger.warning(
            "%s: file tree truncated, checking the first %d files only",
            repo.name,
            len(listing.paths),
        )

    files: list[FileDescriptor] = []
    for path in listing.paths:
        if skip_vendor and is_vendored(path):
            continue
        files.append(FileDescriptor.from_path(path))
    return files
