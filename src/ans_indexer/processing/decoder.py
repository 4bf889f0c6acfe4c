"""ANS event classifier and decoder.

Walks the events of a user transaction, keeps those defined by the ANS
contract, and decodes the known `domains` event types into typed events.
Extending the indexer to a new event type only requires a new payload model
and one entry in `_DECODERS`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any

from pydantic import ValidationError

from ans_indexer.errors import EventDecodeError
from ans_indexer.models.events import AnsEvent
from ans_indexer.models.transactions import Transaction, normalize_address
from ans_indexer.processing.payloads import RegisterNameEventV1, SetNameAddressEventV1

log = logging.getLogger(__name__)

SET_NAME_ADDRESS_V1 = "domains::SetNameAddressEventV1"
REGISTER_NAME_V1 = "domains::RegisterNameEventV1"

_DECODERS: dict[str, Callable[[Any], AnsEvent]] = {
    SET_NAME_ADDRESS_V1: lambda data: SetNameAddressEventV1.model_validate(data).to_event(),
    REGISTER_NAME_V1: lambda data: RegisterNameEventV1.model_validate(data).to_event(),
}


def known_event_types() -> list[str]:
    return list(_DECODERS)


def decode_event(event_type: str, data: Any, version: int) -> AnsEvent | None:
    """Decode one payload by qualified type ("module::name").

    Returns None for types the indexer does not track. Raises
    EventDecodeError if a tracked type's payload does not match its layout.
    """
    decoder = _DECODERS.get(event_type)
    if decoder is None:
        return None
    try:
        return decoder(data)
    except ValidationError as exc:
        raise EventDecodeError(version, event_type, data, exc) from exc


def iter_ans_events(
    transaction: Transaction,
    contract_address: str | None,
) -> Iterator[AnsEvent]:
    """Yield decoded ANS events of a transaction, in event order.

    Yields nothing when no contract address is configured or when the
    transaction is not a user transaction.
    """
    if not contract_address or not transaction.is_user_transaction:
        return

    contract = normalize_address(contract_address)
    for event in transaction.events:
        tag = event.struct_tag
        if tag is None:
            continue
        if normalize_address(tag.address) != contract:
            continue
        decoded = decode_event(tag.qualified_name, event.data, transaction.version)
        if decoded is None:
            log.debug(
                "Ignoring event type %s at version %d", tag.qualified_name, transaction.version,
            )
            continue
        yield decoded
