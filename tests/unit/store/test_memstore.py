"""Tests for the in-memory store."""

import pytest

from telemeter.config import Settings
from telemeter.exceptions import StoreError
from telemeter.store import MemStore, Store
from telemeter.store.models import Metric, MetricFamily, MetricType, PartitionedMetrics


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def _batch(partition_key, timestamp_ms):
    return PartitionedMetrics(
        partition_key=partition_key,
        families=[
            MetricFamily(
                name="up",
                type=MetricType.GAUGE,
                metrics=[Metric(timestamp_ms=timestamp_ms, gauge=1)],
            )
        ],
    )


class TestMemStore:
    """Test MemStore."""

    def test_satisfies_store_protocol(self):
        assert isinstance(MemStore(), Store)

    @pytest.mark.asyncio
    async def test_latest_batch_per_partition(self):
        """A later write replaces the partition's previous batch."""
        store = MemStore()

        await store.write_metrics(_batch("a", 100))
        await store.write_metrics(_batch("b", 100))
        await store.write_metrics(_batch("a", 200))

        batches = await store.read_metrics(0)

        assert len(batches) == 2
        assert {b.partition_key: b.max_timestamp_ms() for b in batches} == {
            "a": 200,
            "b": 100,
        }

    @pytest.mark.asyncio
    async def test_min_timestamp_filter(self):
        store = MemStore()
        await store.write_metrics(_batch("old", 100))
        await store.write_metrics(_batch("new", 500))

        batches = await store.read_metrics(500)

        assert [b.partition_key for b in batches] == ["new"]

    @pytest.mark.asyncio
    async def test_expires_after_ttl(self):
        """Batches older than the TTL are dropped on read."""
        clock = FakeClock()
        store = MemStore(ttl_seconds=60, clock=clock)

        await store.write_metrics(_batch("a", 100))
        clock.now += 30
        await store.write_metrics(_batch("b", 100))

        clock.now += 45
        batches = await store.read_metrics(0)

        assert [b.partition_key for b in batches] == ["b"]
        assert store.partition_count == 1

    @pytest.mark.asyncio
    async def test_ignores_none_and_empty(self):
        store = MemStore()

        await store.write_metrics(None)
        await store.write_metrics(PartitionedMetrics(partition_key="empty"))

        assert store.partition_count == 1
        assert await store.read_metrics(0) == []

    @pytest.mark.asyncio
    async def test_rejects_missing_partition_key(self):
        store = MemStore()

        with pytest.raises(StoreError):
            await store.write_metrics(_batch("", 100))

        assert store.partition_count == 0

    def test_empty_store_is_truthy(self):
        """An empty store is still a store when checked for truthiness."""
        store = MemStore()

        assert store
        assert store.partition_count == 0

    def test_from_settings_uses_ttl(self):
        store = MemStore.from_settings(Settings(memstore_ttl_seconds=42))

        assert store.ttl_seconds == 42
