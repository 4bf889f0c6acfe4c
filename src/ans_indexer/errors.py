"""Fatal processing errors.

Both conditions mean the derived lookup table would be wrong if processing
continued, so they propagate to the caller instead of being skipped.
"""

from __future__ import annotations

from typing import Any


class AnsProcessingError(Exception):
    """Base class for unrecoverable ANS processing failures."""

    def __init__(self, message: str, version: int) -> None:
        super().__init__(message)
        self.version = version


class EventDecodeError(AnsProcessingError):
    """A recognized event type whose payload does not match its expected shape."""

    def __init__(self, version: int, event_type: str, payload: Any, cause: Exception) -> None:
        super().__init__(
            f"version {version} failed! failed to parse type {event_type}, "
            f"data {payload!r}. Error: {cause}",
            version,
        )
        self.event_type = event_type
        self.payload = payload
        self.cause = cause


class InvalidTimestampError(AnsProcessingError):
    """An expiration value that cannot be represented as a UTC timestamp."""

    def __init__(self, version: int, value: Any) -> None:
        super().__init__(f"Could not parse timestamp {value} for version {version}", version)
        self.value = value
