"""Summary pipeline.

This module is the main integration point: it pulls lines from a producer,
parses them, folds them into an Aggregator and ranks the resulting groups.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable
from contextlib import aclosing
from datetime import datetime
from pathlib import Path

from .aggregator import Aggregator
from .config import SummaryConfig, resolve_config
from .formats import JournalJsonParser, RecordParser
from .models import MessageGroup, ParsedRecord
from .ranking import RankMode, rank
from .source import iter_file_lines, iter_journal_lines

logger = logging.getLogger(__name__)


def default_parser() -> RecordParser:
    return JournalJsonParser()


async def iter_records(
    lines: AsyncIterable[str],
    *,
    parser: RecordParser | None = None,
) -> AsyncIterator[ParsedRecord]:
    """Yield parsed records, silently skipping lines the parser rejects."""
    parser = parser or default_parser()
    skipped = 0
    async for line in lines:
        record = parser.parse(line)
        if record is None:
            skipped += 1
            continue
        yield record
    if skipped:
        logger.debug("Skipped %d unparseable or blank lines", skipped)


async def collect_groups(
    lines: AsyncIterable[str],
    *,
    parser: RecordParser | None = None,
    aggregator: Aggregator | None = None,
    strict_timestamps: bool = False,
    now: Callable[[], datetime] | None = None,
) -> Aggregator:
    """Consume ``lines`` to exhaustion and return the populated Aggregator."""
    if aggregator is None:
        aggregator = Aggregator(now=now, strict_timestamps=strict_timestamps)

    async with aclosing(iter_records(lines, parser=parser)) as records:
        async for record in records:
            aggregator.ingest(record)

    logger.debug("Aggregated %d records into %d groups", aggregator.total, len(aggregator))
    return aggregator


async def summarize_lines(
    lines: AsyncIterable[str],
    *,
    mode: RankMode = RankMode.FREQUENCY,
    critical_above_error: bool = False,
    parser: RecordParser | None = None,
    strict_timestamps: bool = False,
    now: Callable[[], datetime] | None = None,
) -> list[MessageGroup]:
    """Aggregate a line stream and return the ranked groups."""
    aggregator = await collect_groups(
        lines, parser=parser, strict_timestamps=strict_timestamps, now=now
    )
    return rank(aggregator.groups(), mode, critical_above_error=critical_above_error)


def open_source(
    *,
    since: str = "today",
    log_file: str | Path | None = None,
    cfg: SummaryConfig | None = None,
    on_diagnostic: Callable[[str], None] | None = None,
) -> AsyncIterator[str]:
    """Pick the producer: a saved export when ``log_file`` is set, else journalctl."""
    cfg = cfg or SummaryConfig()
    if log_file is not None:
        return iter_file_lines(log_file)
    return iter_journal_lines(
        since,
        journalctl=cfg.journalctl,
        on_diagnostic=on_diagnostic,
        stream_limit=cfg.stream_limit,
    )


async def summarize_source(
    *,
    since: str = "today",
    log_file: str | Path | None = None,
    mode: RankMode = RankMode.FREQUENCY,
    cfg: SummaryConfig | None = None,
    on_diagnostic: Callable[[str], None] | None = None,
) -> tuple[list[MessageGroup], int]:
    """Run the whole pipeline against a producer.

    Returns the ranked groups and the number of records absorbed. Without an
    explicit ``cfg`` the environment-resolved defaults are used.
    """
    cfg = cfg or resolve_config()
    source = open_source(since=since, log_file=log_file, cfg=cfg, on_diagnostic=on_diagnostic)

    async with aclosing(source) as lines:
        aggregator = await collect_groups(lines, strict_timestamps=cfg.strict_timestamps)

    ranked = rank(aggregator.groups(), mode, critical_above_error=cfg.critical_above_error)
    return ranked, aggregator.total
