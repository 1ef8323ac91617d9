"""In-memory metric store with time-based expiry."""

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import structlog

from telemeter.config import Settings, get_settings
from telemeter.exceptions import StoreError
from telemeter.store.models import PartitionedMetrics

logger = structlog.get_logger(__name__)


@dataclass
class _Entry:
    batch: PartitionedMetrics
    stored_at: float


class MemStore:
    """Keeps the most recent batch per partition key in memory.

    Entries older than ``ttl_seconds`` are dropped on the next read.

    Example:
        store = MemStore(ttl_seconds=600)
        await store.write_metrics(batch)
        batches = await store.read_metrics(min_timestamp_ms=0)
    """

    def __init__(
        self,
        ttl_seconds: float = 600,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize in-memory store.

        Args:
            ttl_seconds: Lifetime of a stored batch
            clock: Monotonic clock in seconds
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "MemStore":
        """Build an in-memory store using the configured TTL."""
        if settings is None:
            settings = get_settings()
        return cls(ttl_seconds=settings.memstore_ttl_seconds, **kwargs)

    async def read_metrics(self, min_timestamp_ms: int) -> List[PartitionedMetrics]:
        """Return stored batches whose newest sample is at or after min_timestamp_ms."""
        async with self._lock:
            self._expire()

            batches = []
            for entry in self._entries.values():
                newest = entry.batch.max_timestamp_ms()
                if newest is not None and newest >= min_timestamp_ms:
                    batches.append(entry.batch)

            return batches

    async def write_metrics(self, batch: PartitionedMetrics | None) -> None:
        """Replace the stored batch for the batch's partition key.

        Raises:
            StoreError: If the batch has no partition key
        """
        if batch is None:
            return

        if not batch.partition_key:
            raise StoreError("Cannot store metrics without a partition key")

        async with self._lock:
            self._entries[batch.partition_key] = _Entry(
                batch=batch, stored_at=self._clock()
            )

        logger.debug(
            "Stored metrics",
            partition_key=batch.partition_key,
            families=len(batch.families),
            metrics=batch.metric_count,
        )

    def _expire(self) -> None:
        now = self._clock()
        expired = [
            key
            for key, entry in self._entries.items()
            if now - entry.stored_at > self.ttl_seconds
        ]
        for key in expired:
            del self._entries[key]

        if expired:
            logger.debug("Expired partitions", count=len(expired))

    @property
    def partition_count(self) -> int:
        """Number of partitions currently held, including expired ones not yet read."""
        return len(self._entries)
