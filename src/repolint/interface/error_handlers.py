"""Fatal error handling — translate domain errors to process exit codes.

Only errors that abort the whole run reach this layer; repository, file and
checker scoped failures are logged where they happen.
"""

from __future__ import annotations

import logging

from repolint.domain.exceptions import (
    AuthenticationError,
    CatalogListingError,
    ConfigurationError,
    GitHubRateLimitError,
    RepoLintError,
)

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1

_EXCEPTION_EXIT: list[tuple[type[RepoLintError], int]] = [
    (ConfigurationError, 2),
    (AuthenticationError, 3),
    (GitHubRateLimitError, 4),
    (CatalogListingError, 5),
]


def exit_code_for(exc: BaseException) -> int:
    """Return the exit status for a fatal *exc*."""
    for exc_type, code in _EXCEPTION_EXIT:
        if isinstance(exc, exc_type):
            return code
    return EXIT_FAILURE


def handle_fatal(step: str, exc: BaseException, *, verbose: bool = False) -> int:
    """Log a one-line diagnostic for *exc* and return the exit status."""
    if isinstance(exc, RepoLintError):
        logger.error("%s: %s", step, exc, exc_info=verbose)
    else:
        logger.error("%s: unexpected error: %s", step, exc, exc_info=True)
    return exit_code_for(exc)
