"""Configuration models for the indexer."""

from __future__ import annotations

from dataclasses import dataclass

MAINNET_RPC_URL = "https://fullnode.mainnet.aptoslabs.com/v1"


@dataclass
class IndexerConfig:
    """Complete indexer configuration."""

    # Indexer
    poll_interval: int = 5  # seconds to wait when caught up
    batch_size: int = 100  # transactions per fetch
    start_version: int = 0  # used when no cursor is persisted
    log_level: str = "info"

    # Aptos
    rpc_url: str = MAINNET_RPC_URL
    request_timeout: int = 30  # seconds

    # ANS - processing is disabled when unset
    contract_address: str | None = None

    # Storage
    db_path: str = "~/.ans_indexer/state.db"

    @property
    def ans_enabled(self) -> bool:
        return bool(self.contract_address)
