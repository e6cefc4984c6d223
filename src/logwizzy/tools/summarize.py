"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from typing import Any

from logwizzy.core.config import SummaryConfig, resolve_config
from logwizzy.core.log_service import summarize_source
from logwizzy.core.report import build_report
from logwizzy.core.views import View

HARD_LIMIT = 5000
ALL_VIEWS = [v.value for v in View]


def _parse_view(view: str | None) -> View:
    """Parse a user-supplied view name (case-insensitive)."""
    if not view:
        return View.SUMMARY
    try:
        return View(view.strip().lower())
    except ValueError as e:
        valid = ", ".join(ALL_VIEWS)
        raise ValueError(f"Unknown view '{view}'. Valid values: {valid}.") from e


async def summarize_journal_impl(
    *,
    since: str = "today",
    view: str | None = None,
    limit: int | None = None,
    log_file: str | None = None,
    include_times: bool = False,
    cfg: SummaryConfig | None = None,
) -> dict[str, Any]:
    """Implementation for the `summarize_journal` MCP tool.

    Notes
    -----
    - view "summary" truncates to ``limit`` (config default when omitted) and
      appends all error groups when no limit was given
    - views "important" and "errors" rank by severity and ignore the limit
    - journalctl diagnostics are collected into the "diagnostics" list
    """
    cfg = cfg or resolve_config()
    view_eff = _parse_view(view)

    limit_set = limit is not None
    if limit is None:
        limit = cfg.default_limit
    if limit <= 0:
        raise ValueError("limit must be > 0")
    if limit > HARD_LIMIT:
        limit = HARD_LIMIT

    diagnostics: list[str] = []
    ranked, total_records = await summarize_source(
        since=since,
        log_file=log_file,
        mode=view_eff.rank_mode,
        cfg=cfg,
        on_diagnostic=diagnostics.append,
    )

    report = build_report(
        ranked,
        view=view_eff,
        since=since,
        limit=limit,
        limit_set=limit_set,
        total_records=total_records,
        include_times=include_times,
    )
    out = report.model_dump(mode="json")
    out["diagnostics"] = diagnostics
    return out
