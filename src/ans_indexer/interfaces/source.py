"""TransactionSource protocol - supplies committed transactions in version order."""

from __future__ import annotations

from typing import Protocol

from ans_indexer.models.transactions import Transaction


class TransactionSource(Protocol):
    """Fetches transactions from an Aptos node (or any replay source)."""

    async def get_transactions(self, start: int, limit: int) -> list[Transaction]:
        """Return up to `limit` transactions starting at version `start`, ascending."""
        ...

    async def get_transaction_by_version(self, version: int) -> Transaction:
        ...

    async def close(self) -> None:
        ...
