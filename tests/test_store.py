"""SQLiteLookupStore persistence semantics."""

from __future__ import annotations

from datetime import datetime, timezone

from ans_indexer.models.records import CurrentAnsLookup
from ans_indexer.storage.sqlite import SQLiteLookupStore

from tests.conftest import INSERTED_AT

EXPIRES_AT = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def make_lookup(**overrides) -> CurrentAnsLookup:
    defaults = dict(
        domain="alice",
        subdomain="",
        registered_address="0xabc",
        last_transaction_version=42,
        expiration_timestamp=EXPIRES_AT,
        inserted_at=INSERTED_AT,
    )
    defaults.update(overrides)
    return CurrentAnsLookup(**defaults)


async def test_upsert_and_read_back(store):
    record = make_lookup()
    assert await store.upsert_lookups([record]) == 1

    loaded = await store.get_lookup("alice")
    assert loaded == record


async def test_upsert_replaces_every_column(store):
    await store.upsert_lookups([make_lookup()])
    await store.upsert_lookups([
        make_lookup(
            registered_address=None,
            last_transaction_version=43,
            expiration_timestamp=datetime(2030, 1, 1, tzinfo=timezone.utc),
        )
    ])

    loaded = await store.get_lookup("alice", "")
    assert loaded.registered_address is None
    assert loaded.last_transaction_version == 43
    assert loaded.expiration_timestamp == datetime(2030, 1, 1, tzinfo=timezone.utc)
    assert await store.count_lookups() == 1


async def test_subdomain_is_part_of_the_key(store):
    await store.upsert_lookups([
        make_lookup(),
        make_lookup(subdomain="www", registered_address="0xdef"),
    ])

    assert (await store.get_lookup("alice")).registered_address == "0xabc"
    assert (await store.get_lookup("alice", "www")).registered_address == "0xdef"
    assert [r.subdomain for r in await store.get_all_lookups()] == ["", "www"]


async def test_missing_lookup(store):
    assert await store.get_lookup("nobody") is None


async def test_empty_upsert_is_a_no_op(store):
    assert await store.upsert_lookups([]) == 0
    assert await store.count_lookups() == 0


async def test_cursor_round_trip(store):
    assert await store.get_cursor() is None
    await store.set_cursor(100)
    await store.set_cursor(250)
    assert await store.get_cursor() == 250


async def test_file_backed_store_persists(tmp_path):
    db_path = str(tmp_path / "nested" / "state.db")

    s = SQLiteLookupStore(db_path)
    await s.initialize()
    await s.upsert_lookups([make_lookup()])
    await s.set_cursor(42)
    await s.close()

    reopened = SQLiteLookupStore(db_path)
    await reopened.initialize()
    try:
        assert await reopened.get_cursor() == 42
        assert (await reopened.get_lookup("alice")).last_transaction_version == 42
    finally:
        await reopened.close()
