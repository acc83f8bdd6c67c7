"""Abstract interface for remote configuration clients.

Defines the contract the remote reader depends on, so the wire protocol
can be swapped (or faked in tests).
"""
from abc import ABC, abstractmethod

from src.layered_config.document import Document
from src.layered_config.remote.models import RemoteClientOptions


class IRemoteConfigClient(ABC):
    """Fetches one configuration document from a remote service.

    What changes: transport, wire format, authentication
    What never changes: one call returns one nested Document or raises
    """

    @abstractmethod
    async def fetch(self, options: RemoteClientOptions) -> Document:
        """Fetch remote configuration.

        Args:
            options: Resolved client options

        Returns:
            Nested Document (empty if the service has no properties)

        Raises:
            RemoteFetchError: If the attempt failed
        """
        pass
