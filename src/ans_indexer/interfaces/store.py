"""LookupStore protocol - persists the current ANS lookup table."""

from __future__ import annotations

from typing import Iterable, Protocol

from ans_indexer.models.records import CurrentAnsLookup


class LookupStore(Protocol):
    """Persists current lookups and the processing cursor."""

    # ── Lifecycle ──────────────────────────────────────────

    async def initialize(self) -> None:
        """Create tables if they don't exist."""
        ...

    async def close(self) -> None:
        ...

    # ── Cursor ─────────────────────────────────────────────

    async def get_cursor(self) -> int | None:
        """Last fully processed transaction version."""
        ...

    async def set_cursor(self, version: int) -> None:
        ...

    # ── Lookups ────────────────────────────────────────────

    async def upsert_lookups(self, records: Iterable[CurrentAnsLookup]) -> int:
        """Insert or fully replace each record by (domain, subdomain)."""
        ...

    async def get_lookup(self, domain: str, subdomain: str = "") -> CurrentAnsLookup | None:
        ...

    async def get_all_lookups(self) -> list[CurrentAnsLookup]:
        ...

    async def count_lookups(self) -> int:
        ...
