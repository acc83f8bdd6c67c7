"""Layered application configuration loader.

Merges local YAML files, an environment JSON override and an optional
Spring Cloud Config server into one configuration document.
"""

from src.layered_config.document import Document, ensure_document  # noqa: F401
from src.layered_config.exceptions import (  # noqa: F401
    BootstrapNotFoundError,
    ConfigError,
    ConfigNotFoundError,
    ConfigNotLoadedError,
    ConfigParseError,
    ConfigValidationError,
    LayeredConfigError,
    RemoteConfigError,
    RemoteFetchError,
    RetryExhaustedError,
)
from src.layered_config.utils.config import (  # noqa: F401
    deep_merge,
    flatten,
    merge_documents,
    should_include,
    to_nested,
)
from src.layered_config.utils.retry import RetryState, retry_with_state  # noqa: F401
from src.layered_config.remote import (  # noqa: F401
    IRemoteConfigClient,
    RemoteConfigReader,
    SpringCloudConfigClient,
)
from src.layered_config.settings import ConfigSource, LoaderSettings  # noqa: F401
from src.layered_config.loader import ConfigLoader, get_default_loader, instance, load  # noqa: F401

__all__ = [
    # Loader
    "ConfigLoader",
    "ConfigSource",
    "LoaderSettings",
    "get_default_loader",
    "instance",
    "load",
    # Documents
    "Document",
    "ensure_document",
    "deep_merge",
    "merge_documents",
    "flatten",
    "to_nested",
    "should_include",
    # Retry
    "RetryState",
    "retry_with_state",
    # Remote
    "IRemoteConfigClient",
    "RemoteConfigReader",
    "SpringCloudConfigClient",
    # Exceptions
    "LayeredConfigError",
    "ConfigError",
    "ConfigNotFoundError",
    "BootstrapNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "ConfigNotLoadedError",
    "RemoteConfigError",
    "RemoteFetchError",
    "RetryExhaustedError",
]
