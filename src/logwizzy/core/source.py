"""Line producers: a live journalctl process or a saved JSON export."""

from __future__ import annotations

import asyncio
import gzip
import logging
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

logger = logging.getLogger(__name__)

DEFAULT_STREAM_LIMIT = 16 * 1024 * 1024


class JournalSourceError(RuntimeError):
    """Raised when the journalctl process cannot be started."""


def _log_diagnostic(line: str) -> None:
    logger.warning("journalctl error: %s", line)


async def _drain_stderr(
    stream: asyncio.StreamReader,
    report: Callable[[str], None],
    *,
    encoding: str,
    decode_errors: str,
) -> None:
    """Forward every stderr line so the producer never blocks on a full pipe."""
    while True:
        try:
            raw = await stream.readline()
        except ValueError:
            # Oversized line; the reader has already discarded it.
            continue
        if not raw:
            return
        line = raw.decode(encoding, errors=decode_errors).rstrip("\r\n")
        if line:
            report(line)


def journalctl_args(since: str, extra_args: Sequence[str] = ()) -> list[str]:
    """Command line arguments passed to journalctl."""
    return ["-o", "json", f"--since={since}", *extra_args]


async def iter_journal_lines(
    since: str = "today",
    *,
    journalctl: str = "journalctl",
    extra_args: Sequence[str] = (),
    on_diagnostic: Callable[[str], None] | None = None,
    stream_limit: int = DEFAULT_STREAM_LIMIT,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> AsyncIterator[str]:
    """Yield stdout lines of `journalctl -o json --since=<since>`.

    stderr is drained concurrently and handed to ``on_diagnostic`` (default:
    a warning log record). A non-zero exit status is logged, not raised.
    Closing the iterator early terminates the process.
    """
    args = journalctl_args(since, extra_args)
    logger.debug("Starting %s %s", journalctl, " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            journalctl,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            limit=stream_limit,
        )
    except OSError as exc:
        raise JournalSourceError(f"Could not start {journalctl}: {exc}") from exc

    stderr_task = asyncio.create_task(
        _drain_stderr(
            proc.stderr,
            on_diagnostic or _log_diagnostic,
            encoding=encoding,
            decode_errors=decode_errors,
        )
    )

    finished = False
    try:
        while True:
            try:
                raw = await proc.stdout.readline()
            except ValueError:
                logger.debug("Skipping line longer than %d bytes", stream_limit)
                continue
            if not raw:
                break
            yield raw.decode(encoding, errors=decode_errors).rstrip("\r\n")

        await stderr_task
        returncode = await proc.wait()
        finished = True
        if returncode != 0:
            logger.warning("%s exited with status %d", journalctl, returncode)
    finally:
        if not finished:
            if proc.returncode is None:
                try:
                    proc.terminate()
                except ProcessLookupError:
                    pass
            stderr_task.cancel()
            await asyncio.gather(stderr_task, return_exceptions=True)
            await proc.wait()


@asynccontextmanager
async def _open_export(path: Path, *, encoding: str, decode_errors: str):
    """Yield an async text handle over a plain or gzip-compressed export."""
    if path.suffix.lower() != ".gz":
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as handle:
            yield handle
        return

    handle = wrap(gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors))
    try:
        yield handle
    finally:
        await handle.close()


async def iter_file_lines(
    log_path: str | Path,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> AsyncIterator[str]:
    """Yield lines of a saved `journalctl -o json` export."""
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")

    async with _open_export(path, encoding=encoding, decode_errors=decode_errors) as export:
        async for line in export:
            yield line.rstrip("\r\n")
