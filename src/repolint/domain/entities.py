"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class RepositoryDescriptor:
    """One inspectable repository as returned by the catalog listing."""

    name: str
    fork: bool = False
    archived: bool = False
    stars: int = 0
    pushed_at: datetime | None = None
    default_branch: str = "main"


@dataclass(frozen=True, slots=True)
class RepoPage:
    """A single page of the repository listing."""

    repositories: list[RepositoryDescriptor]
    next_page: int | None = None


@dataclass(frozen=True, slots=True)
class TreeListing:
    """Blob paths of a recursive tree listing."""

    paths: list[str]
    truncated: bool = False


@dataclass(slots=True)
class FileRequirements:
    """Materialization flags accumulated while checkers inspect a file.

    Flags only ever go from False to True within one scan.
    """

    needs_local_copy: bool = False
    needs_in_memory_content: bool = False

    @property
    def any(self) -> bool:
        return self.needs_local_copy or self.needs_in_memory_content


@dataclass(slots=True, eq=False)
class FileDescriptor:
    """A file of the scanned repository, shared by every checker."""

    original_path: str
    base_name: str
    materialized_path: str = ""
    materialized_content: str = ""
    requirements: FileRequirements = field(default_factory=FileRequirements)
    materialized: bool = False
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @classmethod
    def from_path(cls, path: str) -> FileDescriptor:
        return cls(original_path=path, base_name=path.rsplit("/", maxsplit=1)[-1])

    def require_local_copy(self) -> None:
        self.requirements.needs_local_copy = True

    def require_content(self) -> None:
        self.requirements.needs_in_memory_content = True


@dataclass(frozen=True, slots=True)
class LintWarning:
    """A single reported finding: ``<repository>: <checker>: <message>``."""

    repository: str
    checker: str
    message: str

    def __str__(self) -> str:
        return f"{self.repository}: {self.checker}: {self.message}"


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Outcome of one external tool invocation."""

    argv: tuple[str, ...]
    exit_code: int | None
    output: str
    timed_out: bool = False
