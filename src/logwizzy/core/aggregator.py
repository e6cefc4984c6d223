"""Message grouping.

One Aggregator is created per run and owned by the pipeline that feeds it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from .models import MessageGroup, ParsedRecord
from .severity import normalize_severity
from .timestamps import TimestampDecodeError, decode_timestamp


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Aggregator:
    """Fold parsed records into groups keyed by exact message text."""

    def __init__(
        self,
        *,
        now: Callable[[], datetime] | None = None,
        strict_timestamps: bool = False,
    ) -> None:
        self._groups: dict[str, MessageGroup] = {}
        self._now = now or _utc_now
        self._strict_timestamps = strict_timestamps
        self._total = 0

    def _timestamp_for(self, record: ParsedRecord) -> datetime:
        try:
            return decode_timestamp(record.raw_timestamp, strict=self._strict_timestamps)
        except TimestampDecodeError:
            return self._now()

    def ingest(self, record: ParsedRecord) -> None:
        """Absorb one record into its group, creating the group on first sight."""
        ts = self._timestamp_for(record)
        self._total += 1

        group = self._groups.get(record.message)
        if group is not None:
            # Severity stays as decided by the first occurrence.
            group.times.append(ts)
            return

        self._groups[record.message] = MessageGroup(
            sample=record.message,
            severity=normalize_severity(record.raw_severity),
            times=[ts],
        )

    def ingest_many(self, records: Iterable[ParsedRecord]) -> None:
        for record in records:
            self.ingest(record)

    def get(self, message: str) -> MessageGroup | None:
        return self._groups.get(message)

    def groups(self) -> list[MessageGroup]:
        """Return all groups (no particular order; rank before display)."""
        return list(self._groups.values())

    @property
    def total(self) -> int:
        """Number of records absorbed so far."""
        return self._total

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, message: object) -> bool:
        return message in self._groups
