"""Terminal rendering of summary reports."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from logwizzy.core.models import SeverityLevel
from logwizzy.core.report import GroupReport, SummaryReport
from logwizzy.core.views import additional_errors_title

SEPARATOR = "---"

_STYLES = {
    SeverityLevel.CRITICAL: "red",
    SeverityLevel.ERROR: "red",
    SeverityLevel.WARNING: "yellow",
    SeverityLevel.INFO: "green",
    SeverityLevel.UNKNOWN: "white",
}


def style_for(level: SeverityLevel) -> str:
    return _STYLES.get(level, "white")


def format_group(group: GroupReport) -> Text:
    """`[LABL] Nx message`, styled by severity. Message text is never parsed as markup."""
    return Text(f"[{group.label}] {group.count}x {group.sample}", style=style_for(group.severity))


def render_groups(console: Console, groups: Iterable[GroupReport]) -> None:
    for group in groups:
        console.print(format_group(group), highlight=False, soft_wrap=True)
        console.print(SEPARATOR, highlight=False)


def render_report(console: Console, report: SummaryReport) -> None:
    """Print the title, the shown groups and, if present, the trailing error section."""
    console.print(Text(report.title), highlight=False)
    render_groups(console, report.groups)
    if report.additional_errors:
        console.print(Text(additional_errors_title(since=report.since)), highlight=False)
        render_groups(console, report.additional_errors)


async def run_spinner(stop: asyncio.Event, console: Console, *, text: str = "Loading logs...") -> None:
    """Show a spinner until ``stop`` is set (or the task is cancelled)."""
    with console.status(text, spinner="line"):
        await stop.wait()
