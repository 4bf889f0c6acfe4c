"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from ans_indexer.models.config import IndexerConfig


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "ANS_INDEXER_",
) -> IndexerConfig:
    """Load indexer configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (ANS_INDEXER_CONTRACT_ADDRESS, etc.)
        2. TOML config file
        3. Defaults from IndexerConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cfg = IndexerConfig()

    # ── Indexer section ────────────────────────────────────
    indexer = raw.get("indexer", {})
    if v := indexer.get("poll_interval"):
        cfg.poll_interval = int(v)
    if v := indexer.get("batch_size"):
        cfg.batch_size = int(v)
    if (v := indexer.get("start_version")) is not None:
        cfg.start_version = int(v)
    if v := indexer.get("log_level"):
        cfg.log_level = str(v)

    # ── Aptos section ──────────────────────────────────────
    aptos = raw.get("aptos", {})
    if v := aptos.get("rpc_url"):
        cfg.rpc_url = str(v)
    if v := aptos.get("request_timeout"):
        cfg.request_timeout = int(v)

    # ── ANS section ────────────────────────────────────────
    ans = raw.get("ans", {})
    if v := ans.get("contract_address"):
        cfg.contract_address = str(v)

    # ── Storage section ────────────────────────────────────
    storage = raw.get("storage", {})
    if v := storage.get("db_path"):
        cfg.db_path = str(v)

    # ── Environment variable overrides (highest priority) ──
    if rpc := os.environ.get(f"{env_prefix}RPC_URL"):
        cfg.rpc_url = rpc
    if addr := os.environ.get(f"{env_prefix}CONTRACT_ADDRESS"):
        cfg.contract_address = addr
    if db := os.environ.get(f"{env_prefix}DB_PATH"):
        cfg.db_path = db
    if start := os.environ.get(f"{env_prefix}START_VERSION"):
        cfg.start_version = int(start)

    if cfg.db_path != ":memory:":
        cfg.db_path = str(Path(cfg.db_path).expanduser())

    return cfg
