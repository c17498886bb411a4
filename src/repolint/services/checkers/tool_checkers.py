"""Checkers that hand a batch of materialized files to an external tool."""

from __future__ import annotations

import logging
from abc import abstractmethod

from repolint.domain.entities import FileDescriptor, ToolResult
from repolint.domain.exceptions import ExternalToolError
from repolint.domain.ports.tool_runner import ToolRunner
from repolint.services.checkers.base import Checker, is_documentation_file
from repolint.services.tool_output import parse_liche, parse_misspell

logger = logging.getLogger(__name__)

LINK_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "/release",
    "/download",
    "localhost",
    r"127\.[01]\.[01]\.[01]",
    r"example\.com",
)


class _ExternalToolChecker(Checker):
    """Accepts documentation files and runs one tool over all of them at once."""

    tool_name = ""

    def __init__(self, runner: ToolRunner, executable: str, timeout: float | None = None) -> None:
        super().__init__()
        self.runner = runner
        self.executable = executable
        self.timeout = timeout

    def push_file(self, file: FileDescriptor) -> None:
        if is_documentation_file(file.base_name):
            file.require_local_copy()
            self.accept_file(file)

    @abstractmethod
    def build_argv(self, paths: list[str]) -> list[str]:
        """Command line running the tool over *paths*."""

    @abstractmethod
    def parse(self, result: ToolResult) -> list[str]:
        """Turn a failing run's output into warning messages."""

    async def check_files(self) -> list[str]:
        paths = self.materialized_paths()
        if not paths:
            return []

        repo_name = self.repo.name if self.repo is not None else "?"
        try:
            result = await self.runner.run(self.build_argv(paths), timeout=self.timeout)
        except ExternalToolError as exc:
            logger.error("%s: %s: %s", repo_name, self.tool_name, exc)
            return []

        if result.timed_out:
            logger.warning("%s: %s timed out", repo_name, self.tool_name)
            return []
        if result.exit_code == 0:
            return []
        return self.parse(result)


class MisspellChecker(_ExternalToolChecker):
    """Spell-check documentation files with ``misspell``."""

    tool_name = "misspell"

    def build_argv(self, paths: list[str]) -> list[str]:
        return [self.executable, "-error", "true", *paths]

    def parse(self, result: ToolResult) -> list[str]:
        findings = parse_misspell(result.output, self.path_translator())
        return [str(finding) for finding in findings]


class BrokenLinkChecker(_ExternalToolChecker):
    """Find unreachable links in documentation files with ``liche``."""

    tool_name = "liche"

    def __init__(
        self,
        runner: ToolRunner,
        executable: str,
        timeout: float | None = None,
        link_timeout: int = 30,
        exclude: tuple[str, ...] = LINK_EXCLUDE_PATTERNS,
    ) -> None:
        super().__init__(runner, executable, timeout)
        self.link_timeout = link_timeout
        self.exclude = exclude

    def build_argv(self, paths: list[str]) -> list[str]:
        return [
            self.executable,
            "-t",
            str(self.link_timeout),
            "-x",
            "|".join(self.exclude),
            *paths,
        ]

    def parse(self, result: ToolResult) -> list[str]:
        findings = parse_liche(result.output, self.path_translator())
        return [str(finding) for finding in findings]
