"""Decoding of journal realtime timestamps (microseconds since the epoch)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
# datetime.max is under 10**18 microseconds past the epoch
_MAX_DIGITS = 18


class TimestampDecodeError(ValueError):
    """Raised when a timestamp token cannot be turned into a datetime."""


def _digits_value(token: str) -> int:
    """Accumulate the decimal digits of a token, dropping anything else."""
    digits = "".join(ch for ch in token if "0" <= ch <= "9")
    if not digits:
        raise TimestampDecodeError(f"no digits in timestamp: {token!r}")
    significant = digits.lstrip("0") or "0"
    if len(significant) > _MAX_DIGITS:
        raise TimestampDecodeError(f"timestamp out of range: {token[:32]!r}")
    return int(significant)


def decode_timestamp(token: str | None, *, strict: bool = False) -> datetime:
    """Convert a microsecond-epoch token into a UTC datetime.

    Lenient by default: stray non-digit characters are dropped
    ("1700000000,000000" decodes like "1700000000000000"). With ``strict``
    the token must consist of ASCII digits only.
    """
    if token is None:
        raise TimestampDecodeError("missing timestamp")
    s = token.strip()
    if not s:
        raise TimestampDecodeError("empty timestamp")
    if strict and not (s.isascii() and s.isdigit()):
        raise TimestampDecodeError(f"unsupported timestamp format: {token!r}")

    micros = _digits_value(s)
    try:
        return _EPOCH + timedelta(microseconds=micros)
    except OverflowError as exc:
        raise TimestampDecodeError(f"timestamp out of range: {token!r}") from exc
