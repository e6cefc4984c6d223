from __future__ import annotations

import asyncio
import io
from datetime import UTC, datetime

import pytest
from rich.console import Console

from logwizzy.core.models import MessageGroup, SeverityLevel
from logwizzy.core.ranking import rank
from logwizzy.core.report import GroupReport, build_report
from logwizzy.core.views import View
from logwizzy.presenter import format_group, render_report, run_spinner, style_for

T0 = datetime(2025, 12, 30, tzinfo=UTC)


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=200, color_system=None), buf


def _ranked() -> list[MessageGroup]:
    return rank(
        [
            MessageGroup(sample="disk full", severity=SeverityLevel.ERROR, times=[T0] * 3),
            MessageGroup(sample="ok", severity=SeverityLevel.UNKNOWN, times=[T0]),
        ]
    )


def test_style_for_levels() -> None:
    assert style_for(SeverityLevel.CRITICAL) == "red"
    assert style_for(SeverityLevel.ERROR) == "red"
    assert style_for(SeverityLevel.WARNING) == "yellow"
    assert style_for(SeverityLevel.INFO) == "green"
    assert style_for(SeverityLevel.UNKNOWN) == "white"


def test_format_group_is_literal_text() -> None:
    group = GroupReport(sample="[bold]not markup[/bold]", count=2, severity=SeverityLevel.WARNING, label="WARN")
    text = format_group(group)
    assert text.plain == "[WARN] 2x [bold]not markup[/bold]"
    assert str(text.style) == "yellow"


def test_render_summary_report() -> None:
    console, buf = _console()
    report = build_report(_ranked(), view=View.SUMMARY, since="today", limit=10)

    render_report(console, report)

    assert buf.getvalue().splitlines() == [
        "#[--- LogWizzy Summary (top 10) (since today) ---]#",
        "[ERRO] 3x disk full",
        "---",
        "[UNKN] 1x ok",
        "---",
        "#[--- Additional Errors (since today) ---]#",
        "[ERRO] 3x disk full",
        "---",
    ]


def test_render_errors_report_has_no_trailer() -> None:
    console, buf = _console()
    report = build_report(_ranked(), view=View.ERRORS, since="-1h", limit=10)

    render_report(console, report)

    out = buf.getvalue()
    assert "Errors Only (since -1h)" in out
    assert "ok" not in out
    assert "Additional Errors" not in out


@pytest.mark.asyncio
async def test_spinner_stops_on_event() -> None:
    console, _ = _console()
    stop = asyncio.Event()
    task = asyncio.create_task(run_spinner(stop, console))
    await asyncio.sleep(0)
    stop.set()
    await asyncio.wait_for(task, timeout=2)
    assert task.done() and task.exception() is None


@pytest.mark.asyncio
async def test_spinner_can_be_cancelled() -> None:
    console, _ = _console()
    task = asyncio.create_task(run_spinner(asyncio.Event(), console))
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
