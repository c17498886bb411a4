"""Content cache — lazily materialize the files checkers asked for.

Each :class:`FileDescriptor` is fetched at most once per scan, and only when
at least one checker flagged it during ``push_file``.  The fetched text is
always written to the scratch directory; it is also kept in memory when a
checker asked for the content itself.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Iterable

from repolint.domain.entities import FileDescriptor, RepositoryDescriptor
from repolint.domain.exceptions import ContentFetchError
from repolint.domain.ports.repo_source import RepoSource
from repolint.infrastructure.scratch import escaped_name
from repolint.services.session import ScanSession

logger = logging.getLogger(__name__)


class ContentCache:
    """Fetch-once materializer for one scan session.

    Parameters
    ----------
    source:
        Adapter that can fetch raw file content.
    session:
        Scan session whose request counter is bumped per fetch.
    scratch_dir:
        Directory under which per-repository copies are written.
    max_concurrency:
        Upper bound on simultaneous content fetches.
    """

    def __init__(
        self,
        source: RepoSource,
        session: ScanSession,
        scratch_dir: Path,
        max_concurrency: int = 8,
    ) -> None:
        self._source = source
        self._session = session
        self._scratch_dir = scratch_dir
        self._max_concurrency = max_concurrency

    def repository_dir(self, repo: RepositoryDescriptor) -> Path:
        return self._scratch_dir / escaped_name(repo.name)

    async def resolve(self, repo: RepositoryDescriptor, file: FileDescriptor) -> None:
        """Materialize *file* according to its requirement flags."""
        requirements = file.requirements
        if requirements.needs_in_memory_content:
            # External tools need a path even when the text is also kept.
            requirements.needs_local_copy = True
        if not requirements.needs_local_copy:
            return

        async with file.lock:
            if file.materialized:
                return

            self._session.count_request()
            try:
                text = await self._source.fetch_file_content(
                    self._session.account, repo, file.original_path
                )
            except ContentFetchError as exc:
                logger.warning("%s: %s: fetch failed: %s", repo.name, file.original_path, exc)
                text = ""

            target_dir = self.repository_dir(repo)
            target = target_dir / escaped_name(file.original_path)
            try:
                target_dir.mkdir(parents=True, exist_ok=True)
                target.write_text(text, encoding="utf-8")
            except OSError as exc:
                logger.warning("%s: %s: write failed: %s", repo.name, file.original_path, exc)
            else:
                file.materialized_path = str(target)

            if requirements.needs_in_memory_content:
                file.materialized_content = text
            file.materialized = True

    async def resolve_all(
        self, repo: RepositoryDescriptor, files: Iterable[FileDescriptor]
    ) -> int:
        """Resolve every flagged file concurrently; return how many were flagged.

        A file that fails unexpectedly is logged and left unmaterialized; the
        other files of the repository are still resolved.
        """
        flagged = [f for f in files if f.requirements.any]
        sem = asyncio.Semaphore(self._max_concurrency)

        async def _resolve_one(file: FileDescriptor) -> None:
            async with sem:
                await self.resolve(repo, file)

        results = await asyncio.gather(
            *(_resolve_one(f) for f in flagged), return_exceptions=True
        )
        for file, result in zip(flagged, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error(
                    "%s: %s: materialize failed: %s", repo.name, file.original_path, result
                )
        return len(flagged)

    def release(self, repo: RepositoryDescriptor) -> None:
        """Drop the repository's materialized copies."""
        shutil.rmtree(self.repository_dir(repo), ignore_errors=True)
