"""Protocol interfaces for the ans_indexer collaborators."""

from ans_indexer.interfaces.source import TransactionSource
from ans_indexer.interfaces.store import LookupStore

__all__ = ["TransactionSource", "LookupStore"]
