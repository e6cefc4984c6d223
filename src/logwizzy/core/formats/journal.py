"""journalctl JSON output parser."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ..models import ParsedRecord


def _token(value: Any) -> str | None:
    """Return a string token for str/int field values, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    return None


def _message_text(value: Any) -> str:
    """Extract message text; journald encodes non-UTF-8 payloads as byte arrays."""
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(
        isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255 for b in value
    ):
        return bytes(value).decode("utf-8", errors="replace")
    return ""


@dataclass(frozen=True, slots=True)
class JournalJsonParser:
    """Parse `journalctl -o json` lines (one JSON object per line)."""

    message_key: str = "MESSAGE"
    priority_key: str = "PRIORITY"
    timestamp_key: str = "__REALTIME_TIMESTAMP"

    def parse(self, line: str) -> ParsedRecord | None:
        """Parse a JSON object line into a ParsedRecord."""
        s = line.strip()
        if not s:
            return None

        try:
            obj = json.loads(s)
        except (ValueError, RecursionError):
            # also covers oversized integers and deep nesting
            return None
        if not isinstance(obj, dict):
            return None

        return ParsedRecord(
            message=_message_text(obj.get(self.message_key)),
            raw_severity=_token(obj.get(self.priority_key)),
            raw_timestamp=_token(obj.get(self.timestamp_key)),
        )
