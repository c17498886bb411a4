"""Checker registry — named checkers, built once per run."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from repolint.domain.exceptions import ConfigurationError
from repolint.domain.ports.tool_runner import ToolRunner
from repolint.services.checkers.base import Checker
from repolint.services.checkers.file_checkers import MissingFileChecker, UnwantedFileChecker
from repolint.services.checkers.text_checkers import (
    AcronymChecker,
    SloppyCopyrightChecker,
    VarTypoChecker,
)
from repolint.services.checkers.tool_checkers import BrokenLinkChecker, MisspellChecker

logger = logging.getLogger(__name__)


class CheckerRegistry:
    """Ordered ``name -> checker`` mapping.

    Names appear in warning lines and in the disable list, so they are part
    of the command-line contract.
    """

    def __init__(self, checkers: Iterable[tuple[str, Checker]] = ()) -> None:
        self._checkers: dict[str, Checker] = {}
        for name, checker in checkers:
            self.register(name, checker)

    def register(self, name: str, checker: Checker) -> None:
        if name in self._checkers:
            raise ValueError(f"Checker '{name}' is already registered")
        if not isinstance(checker, Checker):
            raise TypeError(f"Checker '{name}' is not a Checker instance")
        self._checkers[name] = checker

    def disable(self, names: Iterable[str]) -> None:
        """Remove *names* from the registry; unknown names are a configuration error."""
        names = list(names)
        unknown = sorted({n for n in names if n not in self._checkers})
        if unknown:
            known = ", ".join(self._checkers)
            raise ConfigurationError(
                f"Unknown checkers requested to disable: {', '.join(unknown)} (known: {known})"
            )
        for name in names:
            if self._checkers.pop(name, None) is not None:
                logger.debug("Disabled checker %r", name)

    def names(self) -> list[str]:
        return list(self._checkers)

    def items(self) -> list[tuple[str, Checker]]:
        return list(self._checkers.items())

    def __contains__(self, name: object) -> bool:
        return name in self._checkers

    def __iter__(self) -> Iterator[str]:
        return iter(self._checkers)

    def __len__(self) -> int:
        return len(self._checkers)


def build_default_registry(
    runner: ToolRunner,
    *,
    misspell_bin: str = "misspell",
    liche_bin: str = "liche",
    tool_timeout: float | None = None,
    link_timeout: int = 30,
) -> CheckerRegistry:
    """Instantiate every built-in checker under its stable name."""
    return CheckerRegistry(
        [
            ("misspell", MisspellChecker(runner, misspell_bin, tool_timeout)),
            (
                "broken link",
                BrokenLinkChecker(runner, liche_bin, tool_timeout, link_timeout=link_timeout),
            ),
            ("unwanted file", UnwantedFileChecker()),
            ("sloppy copyright", SloppyCopyrightChecker()),
            ("missing file", MissingFileChecker()),
            ("acronym", AcronymChecker()),
            ("var typo", VarTypoChecker()),
        ]
    )
