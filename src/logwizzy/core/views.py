"""Display policy: which ranked groups are shown, and under which title."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from .models import MessageGroup
from .ranking import RankMode
from .severity import ERROR_LEVELS, IMPORTANT_LEVELS


class View(str, Enum):
    SUMMARY = "summary"  # top N by frequency
    ALL = "all"
    IMPORTANT = "important"  # CRITICAL, ERROR, WARNING
    ERRORS = "errors"  # CRITICAL, ERROR

    @property
    def rank_mode(self) -> RankMode:
        if self in (View.IMPORTANT, View.ERRORS):
            return RankMode.SEVERITY
        return RankMode.FREQUENCY


def resolve_view(*, errors_only: bool = False, important: bool = False, show_all: bool = False) -> View:
    """Combine CLI-style flags; errors beats important beats all."""
    if errors_only:
        return View.ERRORS
    if important:
        return View.IMPORTANT
    if show_all:
        return View.ALL
    return View.SUMMARY


def select_groups(ranked: Sequence[MessageGroup], view: View, *, limit: int) -> list[MessageGroup]:
    """Filter/truncate an already ranked sequence for ``view``.

    The limit only applies to the SUMMARY view.
    """
    if view is View.ERRORS:
        return [g for g in ranked if g.severity in ERROR_LEVELS]
    if view is View.IMPORTANT:
        return [g for g in ranked if g.severity in IMPORTANT_LEVELS]
    if view is View.ALL:
        return list(ranked)
    if limit < 0:
        raise ValueError("limit must be >= 0")
    return list(ranked[:limit])


def additional_errors(ranked: Sequence[MessageGroup]) -> list[MessageGroup]:
    """All CRITICAL/ERROR groups, in ranked order."""
    return [g for g in ranked if g.severity in ERROR_LEVELS]


def wants_additional_errors(view: View, *, limit_set: bool) -> bool:
    """The trailing error section follows a SUMMARY whose limit was not chosen explicitly."""
    return view is View.SUMMARY and not limit_set


def title_for(view: View, *, since: str, limit: int) -> str:
    if view is View.ERRORS:
        return f"#[--- LogWizzy Errors Only (since {since}) ---]#"
    if view is View.IMPORTANT:
        return f"#[--- LogWizzy Important Logs (since {since}) ---]#"
    if view is View.ALL:
        return f"#[--- LogWizzy Full Log Dump (since {since}) ---]#"
    return f"#[--- LogWizzy Summary (top {limit}) (since {since}) ---]#"


def additional_errors_title(*, since: str) -> str:
    return f"#[--- Additional Errors (since {since}) ---]#"
