"""Aptos node integration components."""

from ans_indexer.aptos.client import AptosTransactionSource

__all__ = ["AptosTransactionSource"]
