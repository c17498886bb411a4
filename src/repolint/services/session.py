"""Scan session — per-run state shared by the catalog, tree and content stages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ScanSession:
    """Account being scanned plus the operator-facing request counter."""

    account: str
    host: str = "github.com"
    request_count: int = 0

    def count_request(self) -> None:
        self.request_count += 1

    def repository_label(self, name: str) -> str:
        """``<host>/<account>/<name>``, the prefix of every warning line."""
        return f"{self.host}/{self.account}/{name}"
