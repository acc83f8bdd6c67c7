"""Remote config reader: resolves client options and fetches remote config.

Precedence used to resolve client options (later wins):

1. Built-in defaults
2. Remote bootstrap file (profile-filtered)
3. ``APPLICATION_JSON`` blob
4. Remote environment table (``SPRING_CONFIG_*``)
5. Active profiles, and the application name from the local application
   config when it sets ``spring.cloud.config.name``

Failure policy once enabled:

==========  =====  ==========================================
fail-fast   retry  on fetch failure
==========  =====  ==========================================
false       any    log, return options without remote data
true        false  raise RemoteFetchError
true        true   retry with back-off, raise RetryExhaustedError
==========  =====  ==========================================
"""
import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Union

from src.layered_config.document import Document
from src.layered_config.exceptions import (
    BootstrapNotFoundError,
    LayeredConfigError,
    RemoteFetchError,
)
from src.layered_config.remote.client import SpringCloudConfigClient
from src.layered_config.remote.constants import (
    BOOTSTRAP_FILE_ENV,
    DEFAULT_CLIENT_OPTIONS,
    REMOTE_ENV_PROPERTIES,
    wrap_client_options,
)
from src.layered_config.remote.interfaces import IRemoteConfigClient
from src.layered_config.remote.models import RemoteClientOptions, validate_remote_options
from src.layered_config.utils.config.env import read_application_json, read_env_properties
from src.layered_config.utils.config.locator import ConfigLocator
from src.layered_config.utils.config.merger import ConfigMerger
from src.layered_config.utils.config.yaml_loader import YAMLLoader
from src.layered_config.utils.logging.formatters import redact_sensitive
from src.layered_config.utils.retry import retry_with_state


logger = logging.getLogger(__name__)


def application_name_override(application_config: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Read ``spring.cloud.config.name`` from the local application config."""
    current: Any = application_config or {}
    for segment in ("spring", "cloud", "config", "name"):
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
    return current if isinstance(current, str) and current else None


class RemoteConfigReader:
    """Produces the remote-derived document merged on top of local config.

    Immutable Dependencies:
    - client: Remote config client capability
    - yaml_loader / merger: document parsing and merging
    - environ: environment to read overrides from (None = ``os.environ``)
    - sleep: awaitable sleep used between retries
    """

    def __init__(
        self,
        client: Optional[IRemoteConfigClient] = None,
        yaml_loader: Optional[YAMLLoader] = None,
        merger: Optional[ConfigMerger] = None,
        environ: Optional[Mapping[str, str]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client or SpringCloudConfigClient()
        self.yaml_loader = yaml_loader or YAMLLoader()
        self.merger = merger or ConfigMerger()
        self.environ = environ
        self.sleep = sleep

    def _env(self) -> Mapping[str, str]:
        return os.environ if self.environ is None else self.environ

    def resolve_bootstrap_file(self, default_config_path: Union[str, Path, None]) -> Optional[Path]:
        """Find the remote bootstrap file.

        An explicit path from the environment must exist. Without one, the
        default config directory is searched and a missing file means the
        remote source is disabled.

        Raises:
            BootstrapNotFoundError: If the explicit file does not exist
        """
        explicit = self._env().get(BOOTSTRAP_FILE_ENV, "")
        if explicit:
            path = Path(explicit)
            if not path.is_file():
                logger.error(
                    f"Remote bootstrap file not found: {path}",
                    extra={"path": str(path), "env_var": BOOTSTRAP_FILE_ENV},
                )
                raise BootstrapNotFoundError(str(path), env_var=BOOTSTRAP_FILE_ENV)
            return path

        if default_config_path is None:
            return None

        path = ConfigLocator(default_config_path).bootstrap_file()
        if path is None:
            logger.info(
                f"No bootstrap file in {default_config_path}, remote config disabled",
                extra={"config_dir": str(default_config_path)},
            )
        return path

    def resolve_options(
        self,
        bootstrap_file: Path,
        active_profiles: Sequence[str],
        application_config: Optional[Mapping[str, Any]],
    ) -> RemoteClientOptions:
        """Merge option sources in precedence order and validate the result."""
        bootstrap_document = self.yaml_loader.load(bootstrap_file, active_profiles)

        overrides: dict = {"profiles": list(active_profiles)}
        name = application_name_override(application_config)
        if name is not None:
            overrides["name"] = name

        merged = self.merger.merge_multiple(
            wrap_client_options(DEFAULT_CLIENT_OPTIONS),
            bootstrap_document,
            read_application_json(self._env()),
            read_env_properties(REMOTE_ENV_PROPERTIES, self._env()),
            wrap_client_options(overrides),
        )
        return validate_remote_options(merged, source=str(bootstrap_file))

    async def _fetch_once(self, options: RemoteClientOptions) -> Document:
        try:
            return await self.client.fetch(options)
        except LayeredConfigError:
            raise
        except Exception as e:
            raise RemoteFetchError(
                message=f"Error retrieving remote configuration: {e}",
                endpoint=options.endpoint,
                original=e,
            )

    async def invoke(
        self,
        active_profiles: Sequence[str],
        application_config: Optional[Mapping[str, Any]] = None,
        default_config_path: Union[str, Path, None] = None,
    ) -> Document:
        """Resolve client options and fetch remote configuration.

        Args:
            active_profiles: Active profile names
            application_config: Merged local application config
            default_config_path: Directory searched for ``bootstrap.<ext>``

        Returns:
            ``{}`` when no bootstrap file exists; otherwise the resolved
            options document, with fetched data underneath it when the
            fetch succeeded

        Raises:
            BootstrapNotFoundError: Explicit bootstrap file missing
            ConfigParseError / ConfigValidationError: Bad bootstrap file or
                ``APPLICATION_JSON`` blob
            RemoteFetchError: Fetch failed with fail-fast and no retry
            RetryExhaustedError: Fetch failed with fail-fast and retries ran out
        """
        bootstrap_file = self.resolve_bootstrap_file(default_config_path)
        if bootstrap_file is None:
            return {}

        options = self.resolve_options(bootstrap_file, active_profiles, application_config)
        options_document = options.to_document()

        if not options.enabled:
            logger.info(
                "Remote config disabled",
                extra={"bootstrap_file": str(bootstrap_file)},
            )
            return options_document

        logger.debug(
            f"Remote client options: {redact_sensitive(options_document)}",
            extra={"application": options.name, "endpoint": options.endpoint},
        )

        try:
            fetched = await self._fetch_once(options)
        except RemoteFetchError as e:
            if not options.fail_fast:
                logger.warning(
                    f"Error reading remote config, continuing without it: {e}",
                    extra={"endpoint": options.endpoint, "fail_fast": False},
                )
                return options_document

            if not options.retry_enabled:
                logger.error(
                    f"Error reading remote config: {e}",
                    extra={"endpoint": options.endpoint, "fail_fast": True, "retry": False},
                )
                raise

            logger.warning(
                f"Error reading remote config, retrying: {e}",
                extra={"endpoint": options.endpoint, "fail_fast": True, "retry": True},
            )
            fetched = await retry_with_state(
                lambda: self._fetch_once(options),
                options.retry.new_state(),
                sleep=self.sleep,
                retry_on=(RemoteFetchError,),
            )

        logger.debug(
            "Remote config merged with client options",
            extra={"application": options.name, "fetched_keys": list(fetched.keys())},
        )
        return self.merger.merge_multiple(fetched, options_document)
