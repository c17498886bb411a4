"""Port: external tool runner — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol, Sequence

from repolint.domain.entities import ToolResult


class ToolRunner(Protocol):
    """Abstract contract for running a command-line checking tool."""

    async def run(self, argv: Sequence[str], *, timeout: float | None = None) -> ToolResult:
        """Run *argv* and return its combined stdout/stderr.

        Raises :class:`~repolint.domain.exceptions.ExternalToolError` when the
        executable cannot be started.
        """
        ...
