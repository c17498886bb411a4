from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import pytest

from conftest import FakeRepoSource, repo
from repolint.domain.entities import FileDescriptor
from repolint.services.content_cache import ContentCache
from repolint.services.session import ScanSession


def _cache(source: FakeRepoSource, session: ScanSession, scratch: Path) -> ContentCache:
    return ContentCache(source, session, scratch, max_concurrency=2)


@pytest.mark.asyncio
async def test_unflagged_files_are_never_fetched(session: ScanSession, scratch: Path) -> None:
    source = FakeRepoSource(contents={("demo", "main.go"): "package main"})
    files = [FileDescriptor.from_path("main.go")]

    flagged = await _cache(source, session, scratch).resolve_all(repo("demo"), files)

    assert flagged == 0
    assert source.fetches["main.go"] == 0
    assert files[0].materialized_path == ""
    assert session.request_count == 0


@pytest.mark.asyncio
async def test_file_flagged_twice_is_fetched_once(session: ScanSession, scratch: Path) -> None:
    source = FakeRepoSource(contents={("demo", "README.md"): "hello\n"})
    readme = FileDescriptor.from_path("README.md")
    readme.require_local_copy()
    readme.require_content()
    cache = _cache(source, session, scratch)

    await cache.resolve_all(repo("demo"), [readme, readme])
    await cache.resolve(repo("demo"), readme)

    assert source.fetches["README.md"] == 1
    assert session.request_count == 1
    assert readme.materialized_content == "hello\n"
    assert Path(readme.materialized_path).read_text(encoding="utf-8") == "hello\n"


@pytest.mark.asyncio
async def test_concurrent_resolves_share_one_fetch(session: ScanSession, scratch: Path) -> None:
    source = FakeRepoSource(contents={("demo", "README.md"): "x"})
    readme = FileDescriptor.from_path("README.md")
    readme.require_local_copy()
    cache = _cache(source, session, scratch)

    await asyncio.gather(*(cache.resolve(repo("demo"), readme) for _ in range(5)))

    assert source.fetches["README.md"] == 1


@pytest.mark.asyncio
async def test_in_memory_need_implies_local_copy(session: ScanSession, scratch: Path) -> None:
    source = FakeRepoSource(contents={("demo", "LICENSE"): "MIT"})
    license_file = FileDescriptor.from_path("LICENSE")
    license_file.require_content()

    await _cache(source, session, scratch).resolve(repo("demo"), license_file)

    assert license_file.requirements.needs_local_copy
    assert license_file.materialized_path
    assert license_file.materialized_content == "MIT"


@pytest.mark.asyncio
async def test_local_copy_only_keeps_no_text(session: ScanSession, scratch: Path) -> None:
    source = FakeRepoSource(contents={("demo", "README.md"): "text"})
    readme = FileDescriptor.from_path("README.md")
    readme.require_local_copy()

    await _cache(source, session, scratch).resolve(repo("demo"), readme)

    assert readme.materialized_path
    assert readme.materialized_content == ""


@pytest.mark.asyncio
async def test_nested_paths_do_not_collide(session: ScanSession, scratch: Path) -> None:
    source = FakeRepoSource(
        contents={("demo", "docs/README.md"): "nested", ("demo", "docs%2FREADME.md"): "flat"}
    )
    nested = FileDescriptor.from_path("docs/README.md")
    flat = FileDescriptor.from_path("docs%2FREADME.md")
    for f in (nested, flat):
        f.require_local_copy()
    cache = _cache(source, session, scratch)

    await cache.resolve_all(repo("demo"), [nested, flat])

    assert nested.materialized_path != flat.materialized_path
    assert Path(nested.materialized_path).parent == cache.repository_dir(repo("demo"))
    assert Path(nested.materialized_path).read_text(encoding="utf-8") == "nested"
    assert Path(flat.materialized_path).read_text(encoding="utf-8") == "flat"


@pytest.mark.asyncio
async def test_fetch_failure_is_treated_as_empty(
    session: ScanSession, scratch: Path, caplog: pytest.LogCaptureFixture
) -> None:
    source = FakeRepoSource(contents={("demo", "TODO.md"): "ok"})
    missing = FileDescriptor.from_path("README.md")
    present = FileDescriptor.from_path("TODO.md")
    for f in (missing, present):
        f.require_content()

    with caplog.at_level(logging.WARNING):
        await _cache(source, session, scratch).resolve_all(repo("demo"), [missing, present])

    assert missing.materialized_content == ""
    assert Path(missing.materialized_path).read_text(encoding="utf-8") == ""
    assert present.materialized_content == "ok"
    assert "README.md: fetch failed" in caplog.text


@pytest.mark.asyncio
async def test_release_removes_repository_copies(session: ScanSession, scratch: Path) -> None:
    source = FakeRepoSource(contents={("demo", "README.md"): "x"})
    readme = FileDescriptor.from_path("README.md")
    readme.require_local_copy()
    cache = _cache(source, session, scratch)

    await cache.resolve(repo("demo"), readme)
    cache.release(repo("demo"))

    assert not cache.repository_dir(repo("demo")).exists()
    assert scratch.exists()


class _BrokenSource(FakeRepoSource):
    async def fetch_file_content(self, account, repo, path):
        if path == "README.md":
            raise RuntimeError("decoder exploded")
        return await super().fetch_file_content(account, repo, path)


@pytest.mark.asyncio
async def test_unexpected_fetch_error_spares_other_files(
    session: ScanSession, scratch: Path, caplog: pytest.LogCaptureFixture
) -> None:
    source = _BrokenSource(contents={("demo", "TODO.md"): "ok"})
    broken = FileDescriptor.from_path("README.md")
    present = FileDescriptor.from_path("TODO.md")
    for f in (broken, present):
        f.require_content()

    with caplog.at_level(logging.ERROR):
        flagged = await _cache(source, session, scratch).resolve_all(
            repo("demo"), [broken, present]
        )

    assert flagged == 2
    assert not broken.materialized
    assert broken.materialized_path == ""
    assert present.materialized
    assert present.materialized_content == "ok"
    assert "README.md: materialize failed: decoder exploded" in caplog.text
