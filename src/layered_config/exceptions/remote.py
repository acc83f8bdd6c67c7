"""Remote configuration source exceptions."""
from typing import Optional

from src.layered_config.exceptions.base import LayeredConfigError


class RemoteConfigError(LayeredConfigError):
    """Base exception for remote configuration errors.

    Args:
        message: Human-readable error message
        endpoint: Remote config service endpoint
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        details: Optional[dict] = None,
        error_code: str = "REMOTE_CONFIG_ERROR",
        original: Optional[Exception] = None,
    ):
        self.endpoint = endpoint
        full_details = details or {}
        if endpoint is not None:
            full_details["endpoint"] = endpoint
        super().__init__(message, error_code, full_details, original)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.endpoint:
            parts.append(f"Endpoint: {self.endpoint}")
        return " | ".join(parts)


class RemoteFetchError(RemoteConfigError):
    """A single attempt to fetch remote configuration failed."""

    def __init__(
        self,
        message: str = "Error retrieving remote configuration",
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        original: Optional[Exception] = None,
    ):
        self.status_code = status_code
        details = {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, endpoint, details, "REMOTE_FETCH_FAILED", original)


class RetryExhaustedError(RemoteConfigError):
    """Remote fetch retries ran out."""

    def __init__(
        self,
        message: str = "Error retrieving remote configuration: Maximum retries exceeded.",
        attempts: Optional[int] = None,
        original: Optional[Exception] = None,
    ):
        self.attempts = attempts
        details = {}
        if attempts is not None:
            details["attempts"] = attempts
        super().__init__(message, None, details, "RETRY_EXHAUSTED", original)
