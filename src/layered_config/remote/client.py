"""Spring Cloud Config HTTP client.

Fetches ``GET {endpoint}/{name}/{profiles}/{label}`` and folds the returned
property sources into one nested Document.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from src.layered_config.document import Document, ensure_document
from src.layered_config.exceptions import ConfigParseError, RemoteFetchError
from src.layered_config.remote.interfaces import IRemoteConfigClient
from src.layered_config.remote.models import RemoteClientOptions
from src.layered_config.utils.config.properties import to_nested


logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"
DEFAULT_APPLICATION_NAME = "application"


class SpringCloudConfigClient(IRemoteConfigClient):
    """Async client for a Spring Cloud Config server.

    Responsibilities:
    - Build the environment URL from resolved client options
    - Apply basic auth and TLS verification (``rejectUnauthorized``)
    - Translate httpx errors to RemoteFetchError
    - Merge property sources, earlier sources taking precedence
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            timeout_seconds: Total request timeout
            transport: Custom httpx transport (e.g. ``httpx.MockTransport``)
        """
        self.timeout = httpx.Timeout(timeout_seconds, connect=10.0)
        self._transport = transport

    @staticmethod
    def build_url(options: RemoteClientOptions) -> str:
        name = options.name or DEFAULT_APPLICATION_NAME
        profiles = ",".join(options.profiles) or DEFAULT_PROFILE
        # Spring encodes '/' in labels as '(_)'
        label = options.label.replace("/", "(_)")
        return "/".join([
            options.endpoint.rstrip("/"),
            quote(name, safe=""),
            quote(profiles, safe=","),
            quote(label, safe="()_"),
        ])

    @staticmethod
    def parse_environment(payload: Any, source: str) -> Document:
        """Fold a Spring environment payload into a nested Document."""
        if not isinstance(payload, dict):
            raise ConfigParseError(
                message="Remote environment response is not a JSON object",
                config_file=source,
            )

        property_sources: List[Dict[str, Any]] = payload.get("propertySources") or []
        flat: Dict[str, Any] = {}
        # First source wins, so apply them last-to-first
        for property_source in reversed(property_sources):
            source_map = property_source.get("source") if isinstance(property_source, dict) else None
            if isinstance(source_map, dict):
                flat.update(source_map)

        return to_nested(ensure_document(flat, source=source))

    async def fetch(self, options: RemoteClientOptions) -> Document:
        url = self.build_url(options)
        auth = None
        if options.auth is not None:
            auth = httpx.BasicAuth(options.auth.user, options.auth.password)

        try:
            logger.debug(f"Fetching remote config: {url}", extra={"url": url})
            async with httpx.AsyncClient(
                timeout=self.timeout,
                verify=options.reject_unauthorized,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url, auth=auth, headers={"Accept": "application/json"})
                response.raise_for_status()
                payload = response.json()

        except httpx.HTTPStatusError as e:
            raise RemoteFetchError(
                message=f"Remote config server returned {e.response.status_code}",
                endpoint=options.endpoint,
                status_code=e.response.status_code,
                original=e,
            )
        except httpx.TimeoutException as e:
            raise RemoteFetchError(
                message="Remote config request timed out",
                endpoint=options.endpoint,
                original=e,
            )
        except httpx.RequestError as e:
            raise RemoteFetchError(
                message=f"Failed to connect to remote config server: {e}",
                endpoint=options.endpoint,
                original=e,
            )
        except ValueError as e:
            raise RemoteFetchError(
                message="Remote config server returned invalid JSON",
                endpoint=options.endpoint,
                original=e,
            )

        try:
            document = self.parse_environment(payload, source=url)
        except ConfigParseError as e:
            raise RemoteFetchError(
                message=f"Invalid remote config response: {e.message}",
                endpoint=options.endpoint,
                original=e,
            )

        logger.info(
            f"Remote config fetched: {options.name}",
            extra={"application": options.name, "keys": list(document.keys())},
        )
        return document
