"""Checkers that decide from file names alone; nothing is fetched."""

from __future__ import annotations

import re

from repolint.domain.entities import FileDescriptor, RepositoryDescriptor
from repolint.services.checkers.base import (
    ROOT_LICENSE_FILE_RE,
    ROOT_README_FILE_RE,
    Checker,
)

UNWANTED_FILE_PATTERNS: dict[str, re.Pattern[str]] = {
    # foo.txt.swp
    "Vim swap": re.compile(r"^.*\.swp$"),
    # #foo.txt#
    "Emacs autosave": re.compile(r"^#.*#$"),
    # foo.txt~
    "Emacs backup": re.compile(r"^.*~$"),
    # .#foo.txt
    "Emacs lock file": re.compile(r"^\.#.*$"),
    "Mac OS sys file": re.compile(r"^\.DS_STORE$"),
    "Windows sys file": re.compile(r"^Thumbs\.db$"),
}


class MissingFileChecker(Checker):
    """Report repositories without a root README or LICENSE."""

    def __init__(self) -> None:
        super().__init__()
        self.seen_readme = False
        self.seen_license = False

    def reset(self, repo: RepositoryDescriptor) -> None:
        super().reset(repo)
        self.seen_readme = False
        self.seen_license = False

    def push_file(self, file: FileDescriptor) -> None:
        # Matched against the full path, so only root-level files count.
        if ROOT_README_FILE_RE.match(file.original_path):
            self.seen_readme = True
        elif ROOT_LICENSE_FILE_RE.match(file.original_path):
            self.seen_license = True

    async def check_files(self) -> list[str]:
        warnings: list[str] = []
        if not self.seen_readme:
            warnings.append("missing root README file")
        if not self.seen_license:
            warnings.append("missing root LICENSE file")
        return warnings


class UnwantedFileChecker(Checker):
    """Report editor and OS artifacts that were committed by accident."""

    def __init__(self, patterns: dict[str, re.Pattern[str]] | None = None) -> None:
        super().__init__()
        self.patterns = dict(patterns if patterns is not None else UNWANTED_FILE_PATTERNS)

    async def check_files(self) -> list[str]:
        warnings: list[str] = []
        for f in self.files:
            for kind, pattern in self.patterns.items():
                if pattern.match(f.base_name):
                    warnings.append(f"remove {kind} file: {f.original_path}")
        return warnings
