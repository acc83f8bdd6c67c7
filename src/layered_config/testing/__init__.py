"""Testing utilities and fakes.

Provides stand-ins for the remote config server so loads run fast and
offline.
"""
from src.layered_config.testing.mocks import (
    FakeRemoteConfigClient,
    RecordingSleep,
    property_sources,
)

__all__ = [
    "FakeRemoteConfigClient",
    "RecordingSleep",
    "property_sources",
]
