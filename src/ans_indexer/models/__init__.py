"""Data models for the ans_indexer."""

from ans_indexer.models.events import AnsEvent, RegisterNameEvent, SetNameAddressEvent
from ans_indexer.models.records import CurrentAnsLookup, CurrentAnsLookupPK
from ans_indexer.models.transactions import (
    ContractEvent,
    MoveStructTag,
    Transaction,
    TransactionKind,
    normalize_address,
    parse_transaction,
)
from ans_indexer.models.config import IndexerConfig

__all__ = [
    "AnsEvent", "RegisterNameEvent", "SetNameAddressEvent",
    "CurrentAnsLookup", "CurrentAnsLookupPK",
    "ContractEvent", "MoveStructTag", "Transaction", "TransactionKind",
    "normalize_address", "parse_transaction",
    "IndexerConfig",
]
