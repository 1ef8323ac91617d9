"""Store interface shared by the in-memory and forwarding stores."""

from typing import List, Protocol, runtime_checkable

from telemeter.store.models import PartitionedMetrics


@runtime_checkable
class Store(Protocol):
    """Read/write contract over partitioned metric batches.

    Implementations raise on write failure and return nothing on success.
    """

    async def read_metrics(self, min_timestamp_ms: int) -> List[PartitionedMetrics]:
        """Return batches with samples at or after min_timestamp_ms."""
        ...

    async def write_metrics(self, batch: PartitionedMetrics | None) -> None:
        """Store a batch."""
        ...
