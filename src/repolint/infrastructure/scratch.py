"""Scratch directory for materialized file copies."""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from urllib.parse import quote

logger = logging.getLogger(__name__)


@contextmanager
def scratch_directory(prefix: str = "repolint") -> Iterator[Path]:
    """Create a process-scoped temp directory, removed on exit even on failure."""
    path = Path(tempfile.mkdtemp(prefix=prefix))
    logger.debug("Scratch directory: %s", path)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


def escaped_name(original_path: str) -> str:
    """Flatten a repository path into a single file name.

    Percent-escaping is injective, so ``a/b`` and ``a%2Fb`` stay distinct.
    """
    return quote(original_path, safe="")
