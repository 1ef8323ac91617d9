"""Process wiring: logging plus the configured store chain."""

from typing import Optional

import structlog

from telemeter.config import Settings, get_settings
from telemeter.logging_config import setup_logging
from telemeter.store.base import Store
from telemeter.store.forward.metrics import ForwardMetrics
from telemeter.store.forward.store import ForwardStore
from telemeter.store.memstore import MemStore

logger = structlog.get_logger(__name__)


def create_store(
    settings: Optional[Settings] = None,
    metrics: Optional[ForwardMetrics] = None,
    configure_logging: bool = True,
) -> Store:
    """Build the store used by the ingestion server.

    An in-memory store holds uploads for ``memstore_ttl_seconds``. When
    ``forward_url`` is set it is wrapped in a ``ForwardStore`` so every
    upload is also sent to the receive endpoint.

    Args:
        settings: Configuration (default: global settings)
        metrics: Forwarding instrumentation (default: process registry)
        configure_logging: Whether to run setup_logging first

    Returns:
        Store: MemStore, or ForwardStore wrapping it
    """
    if settings is None:
        settings = get_settings()

    if configure_logging:
        setup_logging(settings)

    store: Store = MemStore.from_settings(settings)

    if settings.forwarding_enabled:
        store = ForwardStore.from_settings(store, settings, metrics=metrics)
        logger.info(
            "Forwarding metrics to receive endpoint",
            url=settings.forward_url,
            timeout_seconds=settings.forward_timeout_seconds,
        )
    else:
        logger.info("Forwarding disabled, no forward_url configured")

    return store
