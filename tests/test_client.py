"""AptosTransactionSource against a mocked REST transport."""

from __future__ import annotations

import httpx
import pytest

from ans_indexer.aptos.client import AptosTransactionSource
from ans_indexer.models.transactions import TransactionKind
from ans_indexer.processing.lookups import current_ans_lookups_from_transaction

from tests.factories import ANS_ADDRESS, raw_event, raw_transaction, set_name_address_data


def _source(handler) -> AptosTransactionSource:
    return AptosTransactionSource("http://aptos.test/v1", transport=httpx.MockTransport(handler))


async def test_get_transactions_parses_page():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[
            raw_transaction(version=42, events=[
                raw_event("SetNameAddressEventV1", set_name_address_data()),
            ]),
            raw_transaction(version=43, kind="state_checkpoint_transaction"),
            raw_transaction(version=44, kind="some_future_kind"),
        ])

    source = _source(handler)
    try:
        txns = await source.get_transactions(42, 3)
    finally:
        await source.close()

    assert seen[0].url.path == "/v1/transactions"
    assert seen[0].url.params["start"] == "42"
    assert seen[0].url.params["limit"] == "3"

    assert [t.version for t in txns] == [42, 43, 44]
    assert txns[0].kind is TransactionKind.USER
    assert txns[1].kind is TransactionKind.STATE_CHECKPOINT
    assert txns[2].kind is TransactionKind.UNKNOWN

    lookups = current_ans_lookups_from_transaction(txns[0], ANS_ADDRESS)
    assert lookups[("alice", "")].registered_address == "0xabc"
    assert lookups[("alice", "")].last_transaction_version == 42


async def test_get_transactions_skips_unversioned():
    pending = {"type": "pending_transaction", "hash": "0xabc"}

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[pending, raw_transaction(version=1)])

    source = _source(handler)
    try:
        txns = await source.get_transactions(0, 10)
    finally:
        await source.close()

    assert [t.version for t in txns] == [1]


async def test_get_transaction_by_version():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/transactions/by_version/42"
        return httpx.Response(200, json=raw_transaction(version=42))

    source = _source(handler)
    try:
        txn = await source.get_transaction_by_version(42)
    finally:
        await source.close()

    assert txn.version == 42
    assert txn.events == ()


async def test_http_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"message": "unavailable"})

    source = _source(handler)
    try:
        with pytest.raises(httpx.HTTPStatusError):
            await source.get_transactions(0, 10)
    finally:
        await source.close()
