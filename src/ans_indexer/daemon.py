"""Main indexer loop - wires the transaction source, reducer and store together."""

from __future__ import annotations

import asyncio
import logging
import signal

from ans_indexer.aptos.client import AptosTransactionSource
from ans_indexer.errors import AnsProcessingError
from ans_indexer.interfaces.source import TransactionSource
from ans_indexer.interfaces.store import LookupStore
from ans_indexer.models.config import IndexerConfig
from ans_indexer.models.transactions import Transaction
from ans_indexer.processing.lookups import (
    LookupMap,
    current_ans_lookups_from_transaction,
    merge_lookups,
)
from ans_indexer.storage.sqlite import SQLiteLookupStore

log = logging.getLogger(__name__)


class IndexerDaemon:
    """Keeps the current ANS lookup table in sync with the chain.

    Pages transactions from the cursor, reduces each one into lookup
    records, merges them across the batch and upserts the result. The cursor
    only advances after the batch has been written.
    """

    def __init__(self, cfg: IndexerConfig) -> None:
        self._cfg = cfg
        self._running = False
        self._next_version = cfg.start_version

        self.store: LookupStore = SQLiteLookupStore(cfg.db_path)
        self.source: TransactionSource = AptosTransactionSource(
            cfg.rpc_url, cfg.request_timeout,
        )

    @property
    def next_version(self) -> int:
        return self._next_version

    async def start(self) -> None:
        """Initialize components and run the main loop."""
        log.info("Starting ans_indexer")
        log.info("  RPC: %s", self._cfg.rpc_url)
        log.info("  Contract: %s", self._cfg.contract_address or "(not set)")
        log.info("  DB: %s", self._cfg.db_path)
        if not self._cfg.ans_enabled:
            log.warning("No ANS contract address configured; lookups will not be derived")

        await self.store.initialize()
        await self.restore_cursor()

        self._running = True
        try:
            await self._main_loop()
        finally:
            await self.source.close()
            await self.store.close()
            log.info("Indexer shut down cleanly")

    def stop(self) -> None:
        """Signal the indexer to stop gracefully."""
        log.info("Stop requested")
        self._running = False

    async def restore_cursor(self) -> None:
        saved = await self.store.get_cursor()
        if saved is not None:
            self._next_version = saved + 1
            log.info("Restored cursor: version %d", saved)
        else:
            log.info("No cursor, starting from version %d", self._next_version)

    async def _main_loop(self) -> None:
        while self._running:
            try:
                processed = await self.process_next_batch()
                if processed == 0:
                    await asyncio.sleep(self._cfg.poll_interval)
            except asyncio.CancelledError:
                log.info("Main loop cancelled")
                break
            except AnsProcessingError as exc:
                log.critical(
                    "Halting at version %d: %s", exc.version, exc, exc_info=True,
                )
                raise

    async def process_next_batch(self) -> int:
        """Process one page of transactions. Returns how many were consumed."""
        transactions = await self.source.get_transactions(
            self._next_version, self._cfg.batch_size,
        )
        if not transactions:
            return 0

        lookups = self.reduce(transactions)
        written = await self.store.upsert_lookups(lookups.values())

        last_version = transactions[-1].version
        await self.store.set_cursor(last_version)
        self._next_version = last_version + 1

        log.info(
            "Processed versions %d-%d: %d lookups upserted",
            transactions[0].version, last_version, written,
        )
        return len(transactions)

    def reduce(self, transactions: list[Transaction]) -> LookupMap:
        """Reduce a batch of transactions into one merged lookup map."""
        lookups: LookupMap = {}
        for txn in transactions:
            merge_lookups(
                lookups,
                current_ans_lookups_from_transaction(txn, self._cfg.contract_address),
            )
        return lookups


async def run_daemon(cfg: IndexerConfig) -> None:
    """Entry point for running the indexer."""
    daemon = IndexerDaemon(cfg)

    loop = asyncio.get_running_loop()

    def _signal_handler():
        daemon.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    await daemon.start()
