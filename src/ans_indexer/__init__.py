"""ans_indexer - Aptos Name Service current-lookup indexer."""

__version__ = "0.1.0"
