from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
from dataclasses import replace

from rich.console import Console
from rich.text import Text

from logwizzy.core.config import SummaryConfig, configure_logging, resolve_config
from logwizzy.core.log_service import summarize_source
from logwizzy.core.report import build_report
from logwizzy.core.source import JournalSourceError
from logwizzy.core.views import resolve_view
from logwizzy.presenter import render_report, run_spinner

VERSION = "0.2.0"
VERSION_TEXT = f"LogWizzy {VERSION}"


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid integer: {s!r}") from e
    if value < 1:
        raise argparse.ArgumentTypeError("limit must be >= 1")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="logwizzy",
        description="Group identical journal messages and show the most frequent or most severe ones.",
    )
    p.add_argument("-s", "--since", default="today", help="Since when to read logs (default: today)")
    p.add_argument(
        "-l",
        "--limit",
        type=_positive_int,
        default=None,
        help="Number of log entries to show (default 10, or LOGWIZZY_DEFAULT_LIMIT)",
    )
    p.add_argument("-a", "--all", dest="show_all", action="store_true", help="Show all logs without limit")
    p.add_argument(
        "-i", "--important", action="store_true", help="Show only important logs (CRIT, ERRO, WARN)"
    )
    p.add_argument("-e", "--errors", dest="errors_only", action="store_true", help="Show only errors (CRIT + ERRO)")
    p.add_argument("-v", "--version", action="store_true", help="Show version and exit")

    p.add_argument("-f", "--file", dest="log_file", default=None, help="Read a saved `journalctl -o json` export")
    p.add_argument("--json", dest="as_json", action="store_true", help="Print the summary as JSON")
    p.add_argument("--times", dest="include_times", action="store_true", help="Include occurrence times in JSON")
    p.add_argument(
        "--critical-first",
        action="store_true",
        help="Rank CRITICAL above ERROR (default: equal)",
    )
    p.add_argument(
        "--strict-timestamps",
        action="store_true",
        help="Treat timestamps with stray characters as invalid",
    )
    return p


def _apply_flags(cfg: SummaryConfig, args: argparse.Namespace) -> SummaryConfig:
    if args.critical_first:
        cfg = replace(cfg, critical_above_error=True)
    if args.strict_timestamps:
        cfg = replace(cfg, strict_timestamps=True)
    return cfg


async def _run(args: argparse.Namespace, *, console: Console, err_console: Console) -> int:
    try:
        cfg = _apply_flags(resolve_config(), args)
    except ValueError as e:
        err_console.print(f"Error: {e}", markup=False, highlight=False)
        return 2

    view = resolve_view(errors_only=args.errors_only, important=args.important, show_all=args.show_all)
    limit_set = args.limit is not None
    limit = args.limit if limit_set else cfg.default_limit

    if not args.as_json:
        console.print(VERSION_TEXT, highlight=False)

    def report_diagnostic(line: str) -> None:
        err_console.print(Text(f"journalctl error: {line}", style="red"), highlight=False)

    stop = asyncio.Event()
    spinner = asyncio.create_task(run_spinner(stop, err_console)) if err_console.is_terminal else None
    try:
        ranked, total_records = await summarize_source(
            since=args.since,
            log_file=args.log_file,
            mode=view.rank_mode,
            cfg=cfg,
            on_diagnostic=report_diagnostic,
        )
    except (JournalSourceError, FileNotFoundError) as e:
        err_console.print(str(e), markup=False, highlight=False)
        return 2
    finally:
        stop.set()
        if spinner is not None:
            await spinner

    report = build_report(
        ranked,
        view=view,
        since=args.since,
        limit=limit,
        limit_set=limit_set,
        total_records=total_records,
        include_times=args.include_times,
    )

    if args.as_json:
        print(report.model_dump_json(indent=2))
        return 0

    render_report(console, report)
    console.print("LogWizzy Done!", highlight=False)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.version:
        print(f"#[--- LogWizzy Version Info ---]#\n{VERSION_TEXT}")
        return

    code = asyncio.run(_run(args, console=Console(), err_console=Console(stderr=True)))
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
