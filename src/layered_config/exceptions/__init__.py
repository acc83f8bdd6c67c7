"""Custom exceptions for the configuration loader."""

from src.layered_config.exceptions.base import LayeredConfigError

from src.layered_config.exceptions.config import (
    ConfigError,
    ConfigNotFoundError,
    BootstrapNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    ConfigNotLoadedError,
)

from src.layered_config.exceptions.remote import (
    RemoteConfigError,
    RemoteFetchError,
    RetryExhaustedError,
)

__all__ = [
    # Base exception
    "LayeredConfigError",
    # Configuration exceptions
    "ConfigError",
    "ConfigNotFoundError",
    "BootstrapNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "ConfigNotLoadedError",
    # Remote exceptions
    "RemoteConfigError",
    "RemoteFetchError",
    "RetryExhaustedError",
]
