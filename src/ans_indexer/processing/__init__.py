"""ANS event decoding and current-lookup reduction."""

from ans_indexer.processing.decoder import (
    REGISTER_NAME_V1,
    SET_NAME_ADDRESS_V1,
    decode_event,
    iter_ans_events,
)
from ans_indexer.processing.lookups import (
    LookupMap,
    current_ans_lookups_from_transaction,
    lookup_from_event,
    merge_lookups,
)

__all__ = [
    "REGISTER_NAME_V1", "SET_NAME_ADDRESS_V1", "decode_event", "iter_ans_events",
    "LookupMap", "current_ans_lookups_from_transaction", "lookup_from_event",
    "merge_lookups",
]
