"""Shared utilities module."""

from src.layered_config.utils.retry import RetryState, retry_with_state  # noqa: F401

__all__ = [
    # Retry utilities
    "RetryState",
    "retry_with_state",
]
