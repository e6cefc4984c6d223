"""Input record formats.

Contains the parser interface and the journalctl JSON parser.
"""

from __future__ import annotations

from .base import RecordParser
from .journal import JournalJsonParser

__all__ = [
    "JournalJsonParser",
    "RecordParser",
]
