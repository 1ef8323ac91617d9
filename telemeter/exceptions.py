"""Custom exceptions for Telemeter."""

from typing import Any


class TelemeterError(Exception):
    """Base exception for all Telemeter errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(TelemeterError):
    """Configuration-related errors."""

    pass


class StoreError(TelemeterError):
    """Errors raised by metric stores."""

    pass


class ForwardError(TelemeterError):
    """Base class for errors while forwarding to a receive endpoint."""

    pass


class ConversionError(ForwardError):
    """Metric families could not be converted to time series."""

    pass


class UnsupportedMetricTypeError(ConversionError):
    """Metric family type cannot be expressed as a single sample."""

    def __init__(self, metric_type: str, family: str) -> None:
        super().__init__(
            f"metric type {metric_type} not supported",
            metric_type=metric_type,
            family=family,
        )


class SerializationError(ForwardError):
    """Write request could not be serialized or compressed."""

    def __init__(self, details: str) -> None:
        super().__init__(f"Failed to encode write request: {details}", details=details)


class ForwardRequestError(ForwardError):
    """Receive endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        status = f"{status_code} {reason}".strip()
        super().__init__(
            f"response status code is {status}",
            status_code=status_code,
        )
        self.status_code = status_code


class ForwardTimeoutError(ForwardError):
    """Receive endpoint did not answer within the forwarding deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(
            f"forwarding request timed out after {timeout_seconds}s",
            timeout_seconds=timeout_seconds,
        )
