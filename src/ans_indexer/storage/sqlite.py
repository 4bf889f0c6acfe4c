"""SQLite implementation of the LookupStore protocol."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

import aiosqlite

from ans_indexer.models.records import CurrentAnsLookup

SCHEMA = """
-- Processing cursor for resumption
CREATE TABLE IF NOT EXISTS cursor (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    last_version INTEGER NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);

-- Current ANS lookups, one row per registered name
CREATE TABLE IF NOT EXISTS current_ans_lookup (
    domain TEXT NOT NULL,
    subdomain TEXT NOT NULL DEFAULT '',
    registered_address TEXT,
    last_transaction_version INTEGER NOT NULL,
    expiration_timestamp TEXT NOT NULL,
    inserted_at TEXT NOT NULL,
    PRIMARY KEY (domain, subdomain)
);
CREATE INDEX IF NOT EXISTS idx_ans_lookup_address
    ON current_ans_lookup(registered_address);
"""

_UPSERT = (
    "INSERT INTO current_ans_lookup"
    " (domain, subdomain, registered_address, last_transaction_version,"
    "  expiration_timestamp, inserted_at)"
    " VALUES (?, ?, ?, ?, ?, ?)"
    " ON CONFLICT(domain, subdomain) DO UPDATE SET"
    " registered_address=excluded.registered_address,"
    " last_transaction_version=excluded.last_transaction_version,"
    " expiration_timestamp=excluded.expiration_timestamp,"
    " inserted_at=excluded.inserted_at"
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteLookupStore:
    """SQLite-backed implementation of the LookupStore protocol."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self._db_path)
        self._db.row_factory = aiosqlite.Row
        await self._db.executescript(SCHEMA)
        await self._db.commit()

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        assert self._db is not None, "Store not initialized. Call initialize() first."
        return self._db

    # ── Cursor ─────────────────────────────────────────────

    async def get_cursor(self) -> int | None:
        async with self.db.execute("SELECT last_version FROM cursor WHERE id=1") as cur:
            row = await cur.fetchone()
            return row["last_version"] if row else None

    async def set_cursor(self, version: int) -> None:
        await self.db.execute(
            "INSERT INTO cursor (id, last_version, updated_at) VALUES (1, ?, ?)"
            " ON CONFLICT(id) DO UPDATE SET last_version=excluded.last_version,"
            " updated_at=excluded.updated_at",
            (version, _now()),
        )
        await self.db.commit()

    # ── Lookups ────────────────────────────────────────────

    async def upsert_lookups(self, records: Iterable[CurrentAnsLookup]) -> int:
        rows = [
            (
                r.domain, r.subdomain, r.registered_address, r.last_transaction_version,
                r.expiration_timestamp.isoformat(), r.inserted_at.isoformat(),
            )
            for r in records
        ]
        if not rows:
            return 0
        await self.db.executemany(_UPSERT, rows)
        await self.db.commit()
        return len(rows)

    async def get_lookup(self, domain: str, subdomain: str = "") -> CurrentAnsLookup | None:
        async with self.db.execute(
            "SELECT * FROM current_ans_lookup WHERE domain=? AND subdomain=?",
            (domain, subdomain),
        ) as cur:
            row = await cur.fetchone()
            return _row_to_lookup(row) if row else None

    async def get_all_lookups(self) -> list[CurrentAnsLookup]:
        async with self.db.execute(
            "SELECT * FROM current_ans_lookup ORDER BY domain, subdomain"
        ) as cur:
            return [_row_to_lookup(row) async for row in cur]

    async def count_lookups(self) -> int:
        async with self.db.execute("SELECT COUNT(*) as c FROM current_ans_lookup") as cur:
            row = await cur.fetchone()
            return row["c"] if row else 0


def _row_to_lookup(row: aiosqlite.Row) -> CurrentAnsLookup:
    return CurrentAnsLookup(
        domain=row["domain"],
        subdomain=row["subdomain"],
        registered_address=row["registered_address"],
        last_transaction_version=row["last_transaction_version"],
        expiration_timestamp=datetime.fromisoformat(row["expiration_timestamp"]),
        inserted_at=datetime.fromisoformat(row["inserted_at"]),
    )
