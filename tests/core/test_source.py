from __future__ import annotations

import logging
from contextlib import aclosing
from pathlib import Path

import pytest

from logwizzy.core.source import (
    JournalSourceError,
    iter_file_lines,
    iter_journal_lines,
    journalctl_args,
)


def test_journalctl_args() -> None:
    assert journalctl_args("today") == ["-o", "json", "--since=today"]
    assert journalctl_args("-2h", ["-u", "nginx"]) == ["-o", "json", "--since=-2h", "-u", "nginx"]


@pytest.mark.asyncio
async def test_iter_journal_lines_streams_stdout_and_drains_stderr(fake_journalctl) -> None:
    script = fake_journalctl(["one", "two"], stderr_lines=["warn a", "", "warn b"])
    diagnostics: list[str] = []

    lines = [
        line
        async for line in iter_journal_lines(
            journalctl=str(script), on_diagnostic=diagnostics.append
        )
    ]

    assert lines == ["one", "two"]
    assert diagnostics == ["warn a", "warn b"]


@pytest.mark.asyncio
async def test_iter_journal_lines_default_diagnostics_are_logged(
    fake_journalctl, caplog: pytest.LogCaptureFixture
) -> None:
    script = fake_journalctl([], stderr_lines=["permission denied"])
    with caplog.at_level(logging.WARNING, logger="logwizzy.core.source"):
        lines = [line async for line in iter_journal_lines(journalctl=str(script))]

    assert lines == []
    assert "journalctl error: permission denied" in caplog.text


@pytest.mark.asyncio
async def test_iter_journal_lines_nonzero_exit_is_logged(
    fake_journalctl, caplog: pytest.LogCaptureFixture
) -> None:
    script = fake_journalctl(["partial"], exit_code=1)
    with caplog.at_level(logging.WARNING, logger="logwizzy.core.source"):
        lines = [line async for line in iter_journal_lines(journalctl=str(script))]

    assert lines == ["partial"]
    assert "exited with status 1" in caplog.text


@pytest.mark.asyncio
async def test_iter_journal_lines_missing_executable(tmp_path: Path) -> None:
    with pytest.raises(JournalSourceError, match="Could not start"):
        _ = [line async for line in iter_journal_lines(journalctl=str(tmp_path / "nope"))]


@pytest.mark.asyncio
async def test_iter_journal_lines_skips_oversized_lines(fake_journalctl) -> None:
    script = fake_journalctl(["short", "x" * 5000, "after"])
    lines = [
        line
        async for line in iter_journal_lines(journalctl=str(script), stream_limit=1024)
    ]
    assert lines[0] == "short"
    assert lines[-1] == "after"
    assert "x" * 5000 not in lines


@pytest.mark.asyncio
async def test_iter_journal_lines_early_close(fake_journalctl) -> None:
    script = fake_journalctl([f"line {i}" for i in range(100)])
    seen: list[str] = []
    async with aclosing(iter_journal_lines(journalctl=str(script))) as lines:
        async for line in lines:
            seen.append(line)
            if len(seen) == 2:
                break
    assert seen == ["line 0", "line 1"]


@pytest.mark.asyncio
async def test_iter_file_lines_plain_and_gzip(tmp_path: Path, write_export) -> None:
    plain = tmp_path / "a.json"
    gz = tmp_path / "a.json.gz"
    write_export(plain, ["one", "", "three"])
    write_export(gz, ["one", "", "three"])

    assert [line async for line in iter_file_lines(plain)] == ["one", "", "three"]
    assert [line async for line in iter_file_lines(gz)] == ["one", "", "three"]


@pytest.mark.asyncio
async def test_iter_file_lines_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _ = [line async for line in iter_file_lines(tmp_path / "missing.json")]
