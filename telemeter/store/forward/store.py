"""Store decorator that forwards written metrics to a remote write endpoint.

Every batch written through ``ForwardStore`` is stored by the wrapped store as
usual and, in a detached task, converted to remote write time series and
POSTed to a Thanos/Prometheus receive endpoint. Forwarding is best effort:
its failures are counted and logged, never returned to the writer.
"""

import asyncio
import time
from datetime import datetime, timezone
from typing import Callable, List, Optional, Set

import httpx
import structlog

from telemeter.config import Settings, get_settings
from telemeter.exceptions import (
    ConfigurationError,
    ForwardRequestError,
    ForwardTimeoutError,
)
from telemeter.logging_config import log_error
from telemeter.store.base import Store
from telemeter.store.forward.converter import (
    convert_to_timeseries,
    timeseries_mean_drift,
)
from telemeter.store.forward.metrics import ForwardMetrics, get_forward_metrics
from telemeter.store.forward.protocol import (
    CONTENT_ENCODING,
    CONTENT_TYPE,
    REMOTE_WRITE_VERSION,
    TENANT_HEADER,
    build_write_request,
    count_samples,
    encode_write_request,
)
from telemeter.store.models import PartitionedMetrics

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_DRIFT_WARNING_SECONDS = 10.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ForwardStore:
    """Forwards every written batch to a remote write endpoint.

    Reads go straight to the wrapped store. Writes are delegated to the
    wrapped store and its outcome is returned; the forwarding attempt runs
    concurrently and outlives the write call.

    Example:
        store = ForwardStore(
            "http://thanos-receive:19291/api/v1/receive",
            MemStore(ttl_seconds=600),
        )

        await store.write_metrics(batch)
        ...
        await store.close()
    """

    def __init__(
        self,
        url: str,
        next_store: Store,
        client: Optional[httpx.AsyncClient] = None,
        metrics: Optional[ForwardMetrics] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        drift_warning_seconds: float = DEFAULT_DRIFT_WARNING_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize forwarding store.

        Args:
            url: Absolute URL of the receive endpoint
            next_store: Store that performs the authoritative write
            client: Shared HTTP client; one is created and owned when omitted
            metrics: Forwarding instrumentation (default: process registry)
            timeout_seconds: Deadline for each forwarding request
            drift_warning_seconds: Mean drift above which a warning is logged
            clock: Source of the current time
        """
        self.url = url
        self.next = next_store
        self.metrics = metrics if metrics is not None else get_forward_metrics()
        self.timeout_seconds = timeout_seconds
        self.drift_warning_seconds = drift_warning_seconds

        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()
        self._clock = clock
        self._pending: Set[asyncio.Task] = set()

    @classmethod
    def from_settings(
        cls,
        next_store: Store,
        settings: Optional[Settings] = None,
        **kwargs,
    ) -> "ForwardStore":
        """Build a forwarding store from configuration.

        Raises:
            ConfigurationError: If no forward URL is configured
        """
        if settings is None:
            settings = get_settings()
        if not settings.forwarding_enabled:
            raise ConfigurationError("Forwarding requires forward_url to be set")

        return cls(
            settings.forward_url,
            next_store,
            timeout_seconds=settings.forward_timeout_seconds,
            drift_warning_seconds=settings.forward_drift_warning_seconds,
            **kwargs,
        )

    async def read_metrics(self, min_timestamp_ms: int) -> List[PartitionedMetrics]:
        return await self.next.read_metrics(min_timestamp_ms)

    async def write_metrics(self, batch: PartitionedMetrics | None) -> None:
        """Write a batch to the wrapped store and forward it in the background.

        Raises:
            Exception: Whatever the wrapped store raises; forwarding never raises
        """
        if batch is None:
            return

        task = asyncio.create_task(self._forward(batch))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

        await self.next.write_metrics(batch)

    async def close(self) -> None:
        """Wait for in-flight forwarding attempts and release the HTTP client."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ForwardStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _forward(self, batch: PartitionedMetrics) -> None:
        # Outermost frame of the detached task: nothing may escape from here.
        try:
            await self._send(batch)
        except Exception as e:
            self.metrics.record_error()
            log_error(
                logger,
                e,
                "forward_metrics",
                partition_key=batch.partition_key,
                url=self.url,
            )

    async def _send(self, batch: PartitionedMetrics) -> None:
        timeseries = convert_to_timeseries(batch, self._clock(), self.metrics)

        if not timeseries:
            logger.info(
                "No time series to forward to receive endpoint",
                partition_key=batch.partition_key,
            )
            return

        write_request = build_write_request(timeseries)
        payload = encode_write_request(write_request)

        headers = {
            "Content-Type": CONTENT_TYPE,
            "Content-Encoding": CONTENT_ENCODING,
            "X-Prometheus-Remote-Write-Version": REMOTE_WRITE_VERSION,
            TENANT_HEADER: batch.partition_key,
        }

        # Deadline covers the whole exchange, not each httpx phase.
        begin = time.perf_counter()
        try:
            response = await asyncio.wait_for(
                self._client.post(
                    self.url,
                    content=payload,
                    headers=headers,
                    timeout=self.timeout_seconds,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise ForwardTimeoutError(self.timeout_seconds) from e

        self.metrics.observe_duration(
            response.status_code, time.perf_counter() - begin
        )

        mean_drift = timeseries_mean_drift(
            timeseries, int(self._clock().timestamp())
        )
        if abs(mean_drift) > self.drift_warning_seconds:
            logger.warning(
                "Mean drift from now exceeds threshold",
                partition_key=batch.partition_key,
                drift_seconds=round(mean_drift, 3),
            )

        if not response.is_success:
            raise ForwardRequestError(response.status_code, response.reason_phrase)

        samples = count_samples(write_request)
        self.metrics.record_samples(samples)

        logger.debug(
            "Forwarded metrics",
            partition_key=batch.partition_key,
            timeseries=len(timeseries),
            samples=samples,
            status_code=response.status_code,
        )
