"""Remote configuration: client options, HTTP client and reader."""

from src.layered_config.remote.models import (  # noqa: F401
    AuthOptions,
    RemoteClientOptions,
    RetryOptions,
    validate_remote_options,
)
from src.layered_config.remote.interfaces import IRemoteConfigClient  # noqa: F401
from src.layered_config.remote.client import SpringCloudConfigClient  # noqa: F401
from src.layered_config.remote.reader import RemoteConfigReader  # noqa: F401

__all__ = [
    # Options
    "AuthOptions",
    "RemoteClientOptions",
    "RetryOptions",
    "validate_remote_options",
    # Client
    "IRemoteConfigClient",
    "SpringCloudConfigClient",
    # Reader
    "RemoteConfigReader",
]
