"""Logging configuration for Telemeter."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from telemeter.config import Settings, get_settings
from telemeter.exceptions import TelemeterError

# Forwarding requests may carry receiver credentials in these headers.
SENSITIVE_KEYS = {"authorization", "cookie", "password", "secret", "token"}


def censor_sensitive_keys(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Remove credentials from logs."""
    for key in list(event_dict.keys()):
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            event_dict[key] = "***REDACTED***"

    return event_dict


def summarize_payloads(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace raw remote write payloads with their size."""
    for key, value in event_dict.items():
        if isinstance(value, (bytes, bytearray, memoryview)):
            event_dict[key] = f"<{len(value)} bytes>"

    return event_dict


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structured logging for the store and forwarder."""
    if settings is None:
        settings = get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        censor_sensitive_keys,
        summarize_payloads,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level),
    )


def log_error(
    logger: structlog.stdlib.BoundLogger,
    error: Exception,
    operation: str,
    partition_key: str | None = None,
    **kwargs: Any,
) -> None:
    """Log a failed operation, including the context carried by Telemeter errors."""
    context = {
        "operation": operation,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }
    if isinstance(error, TelemeterError):
        context.update(error.context)
    if partition_key:
        context["partition_key"] = partition_key
    context.update(kwargs)

    logger.error("operation_failed", **context, exc_info=True)
