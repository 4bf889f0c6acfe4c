"""Aptos REST transaction source - pages committed transactions by version."""

from __future__ import annotations

import logging

import httpx

from ans_indexer.models.config import MAINNET_RPC_URL
from ans_indexer.models.transactions import Transaction, parse_transaction

log = logging.getLogger(__name__)


class AptosTransactionSource:
    """Reads transactions from an Aptos fullnode REST API (`/v1`).

    Uses:
    - GET /transactions?start=&limit=: a page of committed transactions
    - GET /transactions/by_version/{version}: a single transaction

    HTTP errors propagate to the caller as httpx exceptions.
    """

    def __init__(
        self,
        rpc_url: str = MAINNET_RPC_URL,
        timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = rpc_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout, connect=10),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def get_transactions(self, start: int, limit: int) -> list[Transaction]:
        resp = await self._client.get("/transactions", params={"start": start, "limit": limit})
        resp.raise_for_status()

        out: list[Transaction] = []
        for raw in resp.json():
            if raw.get("version") is None:
                log.debug("Skipping unversioned transaction %s", raw.get("hash"))
                continue
            out.append(parse_transaction(raw))

        if out:
            log.debug(
                "Fetched %d transactions (versions %d-%d)",
                len(out), out[0].version, out[-1].version,
            )
        return out

    async def get_transaction_by_version(self, version: int) -> Transaction:
        resp = await self._client.get(f"/transactions/by_version/{version}")
        resp.raise_for_status()
        return parse_transaction(resp.json())

    async def close(self) -> None:
        await self._client.aclose()
