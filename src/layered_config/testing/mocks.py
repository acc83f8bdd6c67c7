"""Fakes for testing without a remote configuration server.

All fakes honor the interface contracts defined in src.layered_config.remote.
"""
from typing import Any, Dict, List, Optional, Union

from src.layered_config.document import Document
from src.layered_config.exceptions import RemoteFetchError
from src.layered_config.remote.interfaces import IRemoteConfigClient
from src.layered_config.remote.models import RemoteClientOptions


class FakeRemoteConfigClient(IRemoteConfigClient):
    """Scripted remote config client.

    Each ``fetch`` consumes the next scripted outcome: a Document is
    returned, an exception is raised. Once the script runs out, the last
    outcome repeats.

    Example:
        client = FakeRemoteConfigClient([RemoteFetchError(), {"key": "value"}])
        await client.fetch(options)  # raises
        await client.fetch(options)  # {"key": "value"}
        client.calls                 # 2
    """

    def __init__(self, outcomes: Optional[List[Union[Document, Exception]]] = None):
        self.outcomes: List[Union[Document, Exception]] = list(outcomes or [{}])
        self.calls = 0
        self.received: List[RemoteClientOptions] = []

    @classmethod
    def failing(cls, message: str = "Remote config unavailable") -> "FakeRemoteConfigClient":
        """Client whose every fetch fails."""
        return cls([RemoteFetchError(message=message)])

    async def fetch(self, options: RemoteClientOptions) -> Document:
        index = min(self.calls, len(self.outcomes) - 1)
        self.calls += 1
        self.received.append(options)

        outcome = self.outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return dict(outcome)


class RecordingSleep:
    """Awaitable stand-in for ``asyncio.sleep`` that records delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def property_sources(*sources: Dict[str, Any], name: str = "app") -> Dict[str, Any]:
    """Build a Spring Cloud Config environment payload."""
    return {
        "name": name,
        "profiles": ["default"],
        "label": "master",
        "propertySources": [
            {"name": f"source-{index}", "source": source}
            for index, source in enumerate(sources)
        ],
    }
