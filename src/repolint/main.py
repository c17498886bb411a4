from __future__ import annotations

import asyncio
import logging
import sys
from typing import Sequence

from repolint.domain.exceptions import RepoLintError
from repolint.infrastructure.config import Settings
from repolint.infrastructure.github_rest_adapter import GitHubRestAdapter
from repolint.infrastructure.scratch import scratch_directory
from repolint.interface.cli import parse_settings, print_warning
from repolint.interface.dependencies import build_http_client, build_registry, build_use_case
from repolint.interface.error_handlers import handle_fatal

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=_LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


async def run(settings: Settings) -> int:
    """Lint the configured account; return the process exit status."""
    step = "read token"
    try:
        token = settings.token_value()
        step = "init checkers"
        registry = build_registry(settings)
        with scratch_directory() as scratch_dir:
            async with build_http_client(settings) as client:
                source = GitHubRestAdapter(
                    client,
                    token=token,
                    api_url=settings.api_url,
                    raw_url=settings.raw_url,
                )
                step = "verify credentials"
                login = await source.verify_credentials()
                logger.debug("Authenticated as %s", login)

                step = "lint repos"
                use_case = build_use_case(settings, source, registry, scratch_dir)
                async for warning in use_case.execute():
                    print_warning(warning)
    except RepoLintError as exc:
        return handle_fatal(step, exc, verbose=settings.verbose)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Parse flags, configure logging and run the scan."""
    _configure_logging(verbose=False)
    try:
        settings = parse_settings(argv)
    except RepoLintError as exc:
        return handle_fatal("parse flags", exc)

    _configure_logging(settings.verbose)
    return asyncio.run(run(settings))


if __name__ == "__main__":
    sys.exit(main())
