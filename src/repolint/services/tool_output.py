"""Parsers for the textual output of external checking tools.

Kept apart from the checkers so they can be tested on captured output
without running any process.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Mapping

logger = logging.getLogger(__name__)

# path:line:col: "word" is a misspelling of "correction"
_MISSPELL_LINE_RE = re.compile(r"^(?P<path>.+?):(?P<line>\d+):(?P<column>\d+): (?P<message>.+)$")

_IGNORED_LINK_ERRORS: tuple[str, ...] = (
    # Local file references; there is no working copy to resolve them against.
    "no such file",
    "root directory is not specified",
)


@dataclass(frozen=True, slots=True)
class ToolFinding:
    """A single located message reported by an external tool."""

    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class PathTranslator:
    """Rewrite scratch paths back to original repository paths."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = dict(mapping)
        keys = sorted((k for k in self._mapping if k), key=len, reverse=True)
        self._re = re.compile("|".join(re.escape(k) for k in keys)) if keys else None

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> PathTranslator:
        return cls(dict(pairs))

    def __call__(self, text: str) -> str:
        if self._re is None:
            return text
        return self._re.sub(lambda m: self._mapping[m.group(0)], text)


def parse_misspell(output: str, translate: PathTranslator) -> list[ToolFinding]:
    """Parse ``misspell`` output into findings located at ``path:line:col``."""
    findings: list[ToolFinding] = []
    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue
        match = _MISSPELL_LINE_RE.match(line)
        if not match:
            logger.debug("misspell: unparseable line %r", line)
            continue
        location = f"{translate(match['path'])}:{match['line']}:{match['column']}"
        findings.append(ToolFinding(location=location, message=match["message"]))
    return findings


def parse_liche(output: str, translate: PathTranslator) -> list[ToolFinding]:
    """Parse ``liche`` output into findings located at ``path: url``.

    Output is a non-indented file header followed by indented result lines;
    an ``ERROR <url>`` line is followed by a line holding the error text.
    Timeouts and local file lookups are dropped.
    """
    findings: list[ToolFinding] = []
    lines = output.splitlines()
    filename = ""
    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1
        if not line.strip():
            continue
        if not line[0].isspace():
            filename = translate(line.strip())
            continue
        stripped = line.strip()
        if not stripped.startswith("ERROR"):
            continue
        url = stripped[len("ERROR"):].strip()
        if i >= len(lines):
            logger.debug("liche: ERROR line without details for %s", url)
            break
        detail = lines[i].strip()
        i += 1
        if detail == "Timeout":
            continue
        if any(ignored in detail for ignored in _IGNORED_LINK_ERRORS):
            continue
        findings.append(ToolFinding(location=f"{filename}: {url}", message=detail))
    return findings
