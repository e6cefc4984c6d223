"""Ordering of message groups for display."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .models import MessageGroup
from .severity import severity_rank


class RankMode(str, Enum):
    """Primary sort key used by rank()."""

    FREQUENCY = "frequency"
    SEVERITY = "severity"


def rank(
    groups: Iterable[MessageGroup],
    mode: RankMode = RankMode.FREQUENCY,
    *,
    critical_above_error: bool = False,
) -> list[MessageGroup]:
    """Return groups in a deterministic total order.

    FREQUENCY: count desc, then sample text asc.
    SEVERITY: severity rank desc, then count desc, then sample text asc.
    Nothing is filtered out.
    """
    if mode is RankMode.SEVERITY:
        return sorted(
            groups,
            key=lambda g: (
                -severity_rank(g.severity, critical_above_error=critical_above_error),
                -g.count,
                g.sample,
            ),
        )
    return sorted(groups, key=lambda g: (-g.count, g.sample))
