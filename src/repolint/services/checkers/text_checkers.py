"""Checkers that scan in-memory file content with regular expressions."""

from __future__ import annotations

import re

from repolint.domain.entities import FileDescriptor
from repolint.services.checkers.base import (
    ROOT_LICENSE_FILE_RE,
    Checker,
    is_documentation_file,
)

ACRONYMS: dict[str, str] = {
    "gnu": "GNU",
    "sql": "SQL",
    "dsl": "DSL",
    "ansi": "ANSI",
    "bios": "BIOS",
    "cgi": "CGI",
    "ssa": "SSA",
    "dpi": "DPI",
    "gui": "GUI",
    "oop": "OOP",
}

VARIABLE_TYPOS: dict[str, str] = {
    "PAHT": "PATH",
    "HOEM": "HOME",
    "GOPAHT": "GOPATH",
    "JAAV_HOME": "JAVA_HOME",
    "JAVA_HOEM": "JAVA_HOME",
    "JAVE_HOME": "JAVA_HOME",
    "CLASSPAHT": "CLASSPATH",
    "CLASPATH": "CLASSPATH",
}

_COPYRIGHT_ALTERNATIVES: tuple[str, ...] = (
    r"copyright (?:year|\d{4}),?\s*full? name",
    r"copyright \(c\)\s*(?:year|\d{4}),?\s*full ?name",
    r"copyright ©\s*(?:year|\d{4}),?\s*full? name",
)


class _DocumentationContentChecker(Checker):
    """Accepts README/CONTRIBUTING/TODO-like files and wants their text."""

    def push_file(self, file: FileDescriptor) -> None:
        if is_documentation_file(file.base_name):
            file.require_content()
            self.accept_file(file)


class SloppyCopyrightChecker(Checker):
    """Report root license files whose copyright line was never filled in."""

    def __init__(self) -> None:
        super().__init__()
        self.copyright_re = re.compile("|".join(_COPYRIGHT_ALTERNATIVES), re.IGNORECASE)

    def push_file(self, file: FileDescriptor) -> None:
        if ROOT_LICENSE_FILE_RE.match(file.original_path):
            file.require_content()
            self.accept_file(file)

    async def check_files(self) -> list[str]:
        return [
            f"{f.original_path}: license contains sloppy copyright"
            for f in self.files
            if self.copyright_re.search(f.materialized_content)
        ]


class AcronymChecker(_DocumentationContentChecker):
    """Report well-known acronyms written in lower case."""

    def __init__(self, acronyms: dict[str, str] | None = None) -> None:
        super().__init__()
        self.acronyms = {k.lower(): v for k, v in (acronyms or ACRONYMS).items()}
        alternatives = "|".join(re.escape(k) for k in self.acronyms)
        # Tokens are delimited by whitespace or the line edges only.
        self.acronym_re = re.compile(rf"(?<!\S)(?:{alternatives})(?!\S)", re.IGNORECASE)

    async def check_files(self) -> list[str]:
        warnings: list[str] = []
        for f in self.files:
            for lineno, line in enumerate(f.materialized_content.split("\n"), start=1):
                for match in self.acronym_re.finditer(line):
                    word = match.group(0)
                    expected = self.acronyms[word.lower()]
                    if word == expected:
                        continue
                    warnings.append(
                        f"{f.original_path}:{lineno}: replace {word} with {expected}"
                    )
        return warnings


class VarTypoChecker(_DocumentationContentChecker):
    """Report ``$VAR`` / ``${VAR}`` references to misspelled well-known variables."""

    def __init__(self, typos: dict[str, str] | None = None) -> None:
        super().__init__()
        self.corrections: dict[str, str] = {}
        parts: list[str] = []
        for typo, corrected in (typos or VARIABLE_TYPOS).items():
            escaped = re.escape(typo)
            parts.append(rf"\${escaped}\b")
            parts.append(rf"\$\{{{escaped}\}}")
            self.corrections[f"${typo}"] = corrected
            self.corrections[f"${{{typo}}}"] = corrected
        self.vars_re = re.compile("|".join(parts))

    async def check_files(self) -> list[str]:
        warnings: list[str] = []
        for f in self.files:
            for lineno, line in enumerate(f.materialized_content.split("\n"), start=1):
                for match in self.vars_re.finditer(line):
                    token = match.group(0)
                    warnings.append(
                        f"{f.original_path}:{lineno}: {token} could be a misspelling "
                        f"of {self.corrections[token]}"
                    )
        return warnings
