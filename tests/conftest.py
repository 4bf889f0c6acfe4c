"""Shared fixtures for ans_indexer tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ans_indexer.daemon import IndexerDaemon
from ans_indexer.models.config import IndexerConfig
from ans_indexer.storage.sqlite import SQLiteLookupStore

from tests.factories import ANS_ADDRESS
from tests.mocks import MockSource

INSERTED_AT = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_test_config(**overrides) -> IndexerConfig:
    """Build an IndexerConfig suitable for testing."""
    defaults = dict(
        poll_interval=0,
        batch_size=10,
        start_version=0,
        rpc_url="http://aptos.test/v1",
        request_timeout=5,
        contract_address=ANS_ADDRESS,
        db_path=":memory:",
    )
    defaults.update(overrides)
    return IndexerConfig(**defaults)


@pytest.fixture
def test_config():
    """Default IndexerConfig for tests."""
    return make_test_config()


@pytest.fixture
async def store():
    """Initialized in-memory SQLiteLookupStore."""
    s = SQLiteLookupStore(":memory:")
    await s.initialize()
    yield s
    await s.close()


@pytest.fixture
def mock_source():
    return MockSource()


@pytest.fixture
async def daemon(test_config, store, mock_source):
    """IndexerDaemon wired to an in-memory store and a mock source."""
    d = IndexerDaemon(test_config)
    await d.source.close()
    d.store = store
    d.source = mock_source
    return d
