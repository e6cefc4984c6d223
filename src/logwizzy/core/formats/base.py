"""Parser interface."""

from __future__ import annotations

from typing import Protocol

from ..models import ParsedRecord


class RecordParser(Protocol):
    """Parser interface: return a ParsedRecord if the line is usable, else None."""

    def parse(self, line: str) -> ParsedRecord | None:
        """Parse one input line into a ParsedRecord if recognized."""
        ...
