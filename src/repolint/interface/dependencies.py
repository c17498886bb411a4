"""Dependency wiring — build the use case from settings and shared resources."""

from __future__ import annotations

from pathlib import Path

import httpx

from repolint.infrastructure.config import Settings
from repolint.infrastructure.github_rest_adapter import GitHubRestAdapter
from repolint.infrastructure.subprocess_runner import SubprocessToolRunner
from repolint.services.catalog import CatalogFilters
from repolint.services.checkers.registry import CheckerRegistry, build_default_registry
from repolint.services.content_cache import ContentCache
from repolint.services.lint_account import LintAccountUseCase
from repolint.services.session import ScanSession


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))


def build_registry(settings: Settings) -> CheckerRegistry:
    """Built-in checkers minus the disabled ones."""
    registry = build_default_registry(
        SubprocessToolRunner(default_timeout=settings.tool_timeout),
        misspell_bin=settings.misspell_bin,
        liche_bin=settings.liche_bin,
        tool_timeout=settings.tool_timeout,
        link_timeout=settings.link_check_timeout,
    )
    registry.disable(settings.disabled_checker_names)
    return registry


def build_use_case(
    settings: Settings,
    source: GitHubRestAdapter,
    registry: CheckerRegistry,
    scratch_dir: Path,
) -> LintAccountUseCase:
    """Assemble the lint pipeline with injected adapters."""
    session = ScanSession(account=settings.account, host=settings.host)
    filters = CatalogFilters(
        skip_forks=settings.skip_forks,
        skip_archived=settings.skip_archived,
        skip_inactive=settings.skip_inactive,
        min_stars=settings.min_stars,
        inactivity_months=settings.inactivity_months,
    )
    cache = ContentCache(source, session, scratch_dir, settings.max_concurrency)
    return LintAccountUseCase(
        source=source,
        session=session,
        registry=registry,
        cache=cache,
        filters=filters,
        per_page=settings.per_page,
        skip_vendor=settings.skip_vendor,
    )
