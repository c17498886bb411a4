"""Subprocess runner — implements the ToolRunner port with asyncio subprocesses."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from repolint.domain.entities import ToolResult
from repolint.domain.exceptions import ExternalToolError

logger = logging.getLogger(__name__)


class SubprocessToolRunner:
    """Run external checking tools, capturing stdout and stderr together."""

    def __init__(self, default_timeout: float | None = None) -> None:
        self._default_timeout = default_timeout

    async def run(self, argv: Sequence[str], *, timeout: float | None = None) -> ToolResult:
        argv = tuple(argv)
        limit = timeout if timeout is not None else self._default_timeout
        logger.debug("Running %s (%d args)", argv[0], len(argv) - 1)

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as exc:
            raise ExternalToolError(f"can't run {argv[0]}: {exc}") from exc

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=limit)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            return ToolResult(argv=argv, exit_code=None, output="", timed_out=True)

        return ToolResult(
            argv=argv,
            exit_code=process.returncode,
            output=stdout.decode("utf-8", errors="replace"),
        )
