"""Transaction model parsing."""

from __future__ import annotations

import pytest

from ans_indexer.models.transactions import (
    MoveStructTag,
    TransactionKind,
    normalize_address,
    parse_transaction,
)

from tests.factories import ANS_ADDRESS, raw_event, raw_transaction


def test_struct_tag_parse():
    tag = MoveStructTag.parse(f"{ANS_ADDRESS}::domains::RegisterNameEventV1")
    assert tag == MoveStructTag(ANS_ADDRESS, "domains", "RegisterNameEventV1")
    assert tag.qualified_name == "domains::RegisterNameEventV1"


def test_struct_tag_drops_generics():
    tag = MoveStructTag.parse("0x1::coin::CoinStore<0x1::aptos_coin::AptosCoin>")
    assert tag.address == "0x1"
    assert tag.qualified_name == "coin::CoinStore"


@pytest.mark.parametrize("type_str", ["u64", "vector<u8>", "address", "0x1::coin", "", "a::b::c"])
def test_non_struct_types(type_str):
    assert MoveStructTag.parse(type_str) is None


@pytest.mark.parametrize(
    "addr, expected",
    [("0x1", "0x1"), ("0x0001", "0x1"), ("0XABC", "0xabc"), ("abc", "0xabc"), ("0x0", "0x0")],
)
def test_normalize_address(addr, expected):
    assert normalize_address(addr) == expected


def test_parse_transaction_keeps_event_order():
    raw = raw_transaction(version=9, events=[
        raw_event("RegisterNameEventV1", {"a": 1}),
        raw_event("SetNameAddressEventV1", {"b": 2}),
    ])

    txn = parse_transaction(raw)

    assert txn.version == 9
    assert txn.kind is TransactionKind.USER
    assert txn.is_user_transaction
    assert [e.struct_tag.name for e in txn.events] == ["RegisterNameEventV1", "SetNameAddressEventV1"]
    assert txn.events[0].data == {"a": 1}


def test_parse_transaction_requires_version():
    with pytest.raises(ValueError):
        parse_transaction({"type": "pending_transaction", "hash": "0x1"})
