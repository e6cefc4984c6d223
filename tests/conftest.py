from __future__ import annotations

import gzip
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def journal_line() -> Callable[..., str]:
    """Build one `journalctl -o json` line from field values."""

    def _line(message: Any = None, priority: Any = None, realtime: Any = None, **extra: Any) -> str:
        obj: dict[str, Any] = dict(extra)
        if message is not None:
            obj["MESSAGE"] = message
        if priority is not None:
            obj["PRIORITY"] = priority
        if realtime is not None:
            obj["__REALTIME_TIMESTAMP"] = realtime
        return json.dumps(obj)

    return _line


@pytest.fixture
def disk_full_lines(journal_line) -> list[str]:
    """Three ERROR lines, one priority-6 line, a blank line and garbage."""
    return [
        journal_line("disk full", "3", "1700000000000000"),
        journal_line("disk full", "3", "1700000001000000"),
        journal_line("disk full", "3", "1700000002000000"),
        journal_line("ok", "6", "1700000003000000"),
        "",
        "this is not json",
    ]


@pytest.fixture
def write_export() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        data = "".join(line + "\n" for line in lines)
        if path.suffix == ".gz":
            with gzip.open(path, "wt", encoding="utf-8") as f:
                f.write(data)
        else:
            path.write_text(data, encoding="utf-8")

    return _write


@pytest.fixture
def fake_journalctl(tmp_path: Path) -> Callable[..., Path]:
    """Create an executable stand-in for journalctl.

    It records its arguments to ``args.txt``, prints ``stdout_lines`` and
    ``stderr_lines`` and exits with ``exit_code``.
    """

    def _make(
        stdout_lines: list[str], stderr_lines: list[str] | None = None, exit_code: int = 0
    ) -> Path:
        out = tmp_path / "stdout.txt"
        out.write_text("".join(line + "\n" for line in stdout_lines), encoding="utf-8")
        err = tmp_path / "stderr.txt"
        err.write_text("".join(line + "\n" for line in stderr_lines or []), encoding="utf-8")
        args = tmp_path / "args.txt"

        script = tmp_path / "journalctl"
        script.write_text(
            "#!/bin/sh\n"
            f'printf "%s\\n" "$@" > "{args}"\n'
            f'cat "{err}" >&2\n'
            f'cat "{out}"\n'
            f"exit {exit_code}\n",
            encoding="utf-8",
        )
        script.chmod(0o755)
        return script

    return _make
