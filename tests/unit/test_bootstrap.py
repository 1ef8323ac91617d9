"""Tests for store wiring."""

import pytest
from prometheus_client import CollectorRegistry

from telemeter.bootstrap import create_store
from telemeter.config import Settings
from telemeter.store import MemStore
from telemeter.store.forward import ForwardMetrics, ForwardStore


def test_memstore_only_without_forward_url():
    store = create_store(
        Settings(forward_url=None, memstore_ttl_seconds=120),
        configure_logging=False,
    )

    assert isinstance(store, MemStore)
    assert store.ttl_seconds == 120


@pytest.mark.asyncio
async def test_forward_store_wraps_memstore():
    settings = Settings(
        forward_url="http://receive:19291/api/v1/receive",
        forward_timeout_seconds=3,
        memstore_ttl_seconds=120,
    )

    store = create_store(
        settings,
        metrics=ForwardMetrics(CollectorRegistry()),
        configure_logging=False,
    )

    assert isinstance(store, ForwardStore)
    assert store.url == "http://receive:19291/api/v1/receive"
    assert store.timeout_seconds == 3
    assert isinstance(store.next, MemStore)
    assert store.next.ttl_seconds == 120
    await store.close()
