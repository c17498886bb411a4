"""Checker protocol shared by every built-in check.

A checker sees each repository in three phases:

1. ``reset(repo)`` clears state left from the previous repository.
2. ``push_file(file)`` is called for every file of the tree.  Only the path
   is available; a checker that wants the bytes flags the shared descriptor
   and keeps a reference to it.
3. ``check_files()`` runs after the dispatcher materialized every flagged
   file and returns warning messages in the order they were found.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from repolint.domain.entities import FileDescriptor, RepositoryDescriptor
from repolint.services.tool_output import PathTranslator

DOC_FILE_RE = re.compile(r"^(?:README|CONTRIBUTING|TODO).*")
ROOT_LICENSE_FILE_RE = re.compile(r"^(?:licen[sc]e|copying)(?:[.-].+)?$", re.IGNORECASE)
ROOT_README_FILE_RE = re.compile(r"^readme(?:\..+)?$", re.IGNORECASE)


def is_documentation_file(base_name: str) -> bool:
    return DOC_FILE_RE.match(base_name) is not None


class Checker(ABC):
    """Base for checkers; keeps the accepted files of the current repository."""

    def __init__(self) -> None:
        self.files: list[FileDescriptor] = []
        self.repo: RepositoryDescriptor | None = None

    def reset(self, repo: RepositoryDescriptor) -> None:
        self.files.clear()
        self.repo = repo

    def push_file(self, file: FileDescriptor) -> None:
        """Accept every file; subclasses narrow this down."""
        self.accept_file(file)

    def accept_file(self, file: FileDescriptor) -> None:
        self.files.append(file)

    @abstractmethod
    async def check_files(self) -> list[str]:
        """Inspect the accepted files and return warning messages."""

    # ── Helpers for checkers that shell out ────────────────────────────

    def materialized_paths(self) -> list[str]:
        return [f.materialized_path for f in self.files if f.materialized_path]

    def path_translator(self) -> PathTranslator:
        return PathTranslator.from_pairs(
            (f.materialized_path, f.original_path) for f in self.files if f.materialized_path
        )
