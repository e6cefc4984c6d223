"""Severity normalization for journal PRIORITY values."""

from __future__ import annotations

from .models import SeverityLevel

_PRIORITY_TOKENS: dict[str, SeverityLevel] = {
    "0": SeverityLevel.CRITICAL,
    "emerg": SeverityLevel.CRITICAL,
    "emergency": SeverityLevel.CRITICAL,
    "1": SeverityLevel.CRITICAL,
    "alert": SeverityLevel.CRITICAL,
    "2": SeverityLevel.CRITICAL,
    "crit": SeverityLevel.CRITICAL,
    "3": SeverityLevel.ERROR,
    "err": SeverityLevel.ERROR,
    "error": SeverityLevel.ERROR,
    "4": SeverityLevel.WARNING,
    "warn": SeverityLevel.WARNING,
    "warning": SeverityLevel.WARNING,
    "5": SeverityLevel.INFO,
    "notice": SeverityLevel.INFO,
    "info": SeverityLevel.INFO,
}

_RANKS: dict[SeverityLevel, int] = {
    SeverityLevel.CRITICAL: 3,
    SeverityLevel.ERROR: 3,
    SeverityLevel.WARNING: 2,
    SeverityLevel.INFO: 1,
    SeverityLevel.UNKNOWN: 0,
}

ERROR_LEVELS = frozenset({SeverityLevel.CRITICAL, SeverityLevel.ERROR})
IMPORTANT_LEVELS = ERROR_LEVELS | {SeverityLevel.WARNING}


def normalize_severity(token: str | None) -> SeverityLevel:
    """Map a numeric or textual priority token to a SeverityLevel.

    Unrecognized tokens (including None and "") map to UNKNOWN.
    """
    if token is None:
        return SeverityLevel.UNKNOWN
    return _PRIORITY_TOKENS.get(token.strip().lower(), SeverityLevel.UNKNOWN)


def severity_rank(level: SeverityLevel, *, critical_above_error: bool = False) -> int:
    """Return the sort weight of a level (higher ranks first).

    CRITICAL and ERROR share a rank unless ``critical_above_error`` is set.
    """
    if critical_above_error and level is SeverityLevel.CRITICAL:
        return _RANKS[SeverityLevel.ERROR] + 1
    return _RANKS[level]
