"""Serializable summary snapshots handed to presenters."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, Field

from .models import MessageGroup, SeverityLevel
from .views import View, additional_errors, select_groups, title_for, wants_additional_errors


class GroupReport(BaseModel):
    sample: str = Field(description="Message text shared by every occurrence.")
    count: int = Field(ge=1, description="Number of occurrences.")
    severity: SeverityLevel = Field(description="Severity decided by the first occurrence.")
    label: str = Field(description="Four-letter severity tag.")
    first_seen: datetime | None = None
    last_seen: datetime | None = None
    times: list[datetime] | None = Field(
        default=None, description="Every occurrence time in arrival order (opt-in)."
    )

    @classmethod
    def from_group(cls, group: MessageGroup, *, include_times: bool = False) -> GroupReport:
        return cls(
            sample=group.sample,
            count=group.count,
            severity=group.severity,
            label=group.severity.label,
            first_seen=group.first_seen,
            last_seen=group.last_seen,
            times=list(group.times) if include_times else None,
        )


class SummaryReport(BaseModel):
    title: str
    view: View
    since: str
    total_records: int = Field(ge=0)
    total_groups: int = Field(ge=0)
    groups: list[GroupReport] = Field(default_factory=list)
    additional_errors: list[GroupReport] = Field(default_factory=list)


def build_report(
    ranked: Sequence[MessageGroup],
    *,
    view: View,
    since: str,
    limit: int,
    limit_set: bool = False,
    total_records: int = 0,
    include_times: bool = False,
) -> SummaryReport:
    """Apply the view policy to ranked groups and snapshot the result."""
    shown = select_groups(ranked, view, limit=limit)
    extra = additional_errors(ranked) if wants_additional_errors(view, limit_set=limit_set) else []
    return SummaryReport(
        title=title_for(view, since=since, limit=limit),
        view=view,
        since=since,
        total_records=total_records,
        total_groups=len(ranked),
        groups=[GroupReport.from_group(g, include_times=include_times) for g in shown],
        additional_errors=[GroupReport.from_group(g, include_times=include_times) for g in extra],
    )
