"""Expiration time conversion helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from ans_indexer.errors import InvalidTimestampError

U64_MAX = 2**64 - 1


def decimal_to_u64(value: Decimal, version: int) -> int:
    """Truncate a decimal to an unsigned 64-bit integer.

    Raises InvalidTimestampError for non-finite, negative or oversized values.
    """
    try:
        if not value.is_finite():
            raise InvalidTimestampError(version, value)
        # Range-check as Decimal before materializing the integer
        if value <= -1 or value >= U64_MAX + 1:
            raise InvalidTimestampError(version, value)
        return int(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidTimestampError(version, value) from exc


def parse_timestamp_secs(secs: int, version: int) -> datetime:
    """Seconds since the Unix epoch → UTC datetime (second precision)."""
    try:
        return datetime.fromtimestamp(secs, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidTimestampError(version, secs) from exc


def expiration_timestamp(value: Decimal, version: int) -> datetime:
    return parse_timestamp_secs(decimal_to_u64(value, version), version)
