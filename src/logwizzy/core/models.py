"""Core data models for journal summarization."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SeverityLevel(str, Enum):
    """Normalized severity levels used by the summary pipeline."""

    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    UNKNOWN = "UNKNOWN"

    @property
    def label(self) -> str:
        """Four-letter tag used in terminal output."""
        return _LABELS[self]


_LABELS = {
    SeverityLevel.CRITICAL: "CRIT",
    SeverityLevel.ERROR: "ERRO",
    SeverityLevel.WARNING: "WARN",
    SeverityLevel.INFO: "INFO",
    SeverityLevel.UNKNOWN: "UNKN",
}


@dataclass(frozen=True, slots=True)
class ParsedRecord:
    """Minimal view of one journal line (not retained after aggregation)."""

    message: str
    raw_severity: str | None = None
    raw_timestamp: str | None = None


@dataclass(slots=True)
class MessageGroup:
    """All occurrences of one exact message text."""

    sample: str
    severity: SeverityLevel
    times: list[datetime] = field(default_factory=list)  # arrival order, append-only

    @property
    def count(self) -> int:
        return len(self.times)

    @property
    def first_seen(self) -> datetime | None:
        return self.times[0] if self.times else None

    @property
    def last_seen(self) -> datetime | None:
        return self.times[-1] if self.times else None
