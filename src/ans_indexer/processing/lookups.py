"""Reduce decoded ANS events into current lookup records.

`current_ans_lookups_from_transaction` is a pure transform of one
transaction: it never consults stored state and starts from an empty map on
every call. Events are applied in transaction order, so when several events
touch the same (domain, subdomain) the last one wins outright.

`merge_lookups` folds per-transaction maps together for callers that process
a stream of transactions.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ans_indexer.models.events import AnsEvent, RegisterNameEvent, SetNameAddressEvent
from ans_indexer.models.records import CurrentAnsLookup, CurrentAnsLookupPK
from ans_indexer.models.transactions import Transaction
from ans_indexer.processing.decoder import iter_ans_events
from ans_indexer.processing.timestamps import expiration_timestamp

LookupMap = dict[CurrentAnsLookupPK, CurrentAnsLookup]


def lookup_from_event(event: AnsEvent, version: int, inserted_at: datetime) -> CurrentAnsLookup:
    """Build the current record implied by one decoded event."""
    if isinstance(event, SetNameAddressEvent):
        registered_address = event.new_address
    elif isinstance(event, RegisterNameEvent):
        registered_address = None
    else:
        raise TypeError(f"unsupported ANS event: {type(event).__name__}")

    return CurrentAnsLookup(
        domain=event.domain_name,
        subdomain=event.subdomain_name or "",
        registered_address=registered_address,
        last_transaction_version=version,
        expiration_timestamp=expiration_timestamp(event.expiration_time_secs, version),
        inserted_at=inserted_at,
    )


def current_ans_lookups_from_transaction(
    transaction: Transaction,
    contract_address: str | None,
    inserted_at: datetime | None = None,
) -> LookupMap:
    """Derive the current lookup records touched by one transaction.

    Args:
        transaction: the transaction to inspect.
        contract_address: ANS contract address; None disables processing.
        inserted_at: processing timestamp stamped on every record.
            Defaults to the current UTC time, captured once per call.

    Raises:
        EventDecodeError: a tracked event's payload is malformed.
        InvalidTimestampError: an expiration cannot be represented.
    """
    lookups: LookupMap = {}
    if inserted_at is None:
        inserted_at = datetime.now(timezone.utc)

    for event in iter_ans_events(transaction, contract_address):
        record = lookup_from_event(event, transaction.version, inserted_at)
        lookups[record.pk] = record
    return lookups


def merge_lookups(into: LookupMap, new: LookupMap) -> LookupMap:
    """Merge `new` into `into` in place; the later transaction version wins."""
    for pk, record in new.items():
        existing = into.get(pk)
        if existing is None or record.last_transaction_version >= existing.last_transaction_version:
            into[pk] = record
    return into
