"""Runtime configuration and environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class SummaryConfig:
    journalctl: str = "journalctl"
    default_limit: int = 10

    # Rank CRITICAL strictly above ERROR in severity ordering.
    critical_above_error: bool = False
    # Reject timestamps that are not purely digits instead of dropping stray characters.
    strict_timestamps: bool = False

    # Max bytes per line read from the journalctl pipe.
    stream_limit: int = 16 * 1024 * 1024


def _env_bool(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off)")


def _env_positive_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{name} must be >= 1")
    return value


def resolve_config(cfg: SummaryConfig | None = None) -> SummaryConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = SummaryConfig()

    changes: dict[str, object] = {}

    journalctl = os.getenv("LOGWIZZY_JOURNALCTL")
    if journalctl:
        changes["journalctl"] = journalctl

    limit = _env_positive_int("LOGWIZZY_DEFAULT_LIMIT")
    if limit is not None:
        changes["default_limit"] = limit

    crit_first = _env_bool("LOGWIZZY_CRITICAL_ABOVE_ERROR")
    if crit_first is not None:
        changes["critical_above_error"] = crit_first

    strict = _env_bool("LOGWIZZY_STRICT_TIMESTAMPS")
    if strict is not None:
        changes["strict_timestamps"] = strict

    if not changes:
        return cfg
    return replace(cfg, **changes)


def configure_logging(default_level: str = "WARNING") -> None:
    """Configure stderr logging; ``LOGWIZZY_LOG_LEVEL`` overrides the level."""
    level_name = os.getenv("LOGWIZZY_LOG_LEVEL", default_level).upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
