"""Configuration loader: local files, environment JSON and remote config.

Example:
    loader = ConfigLoader()
    config = await loader.load()
    config["spring"]["application"]["name"]

    # Later, anywhere holding the loader
    loader.instance()
"""
import copy
import logging
from typing import Dict, Iterable, Mapping, Optional, Tuple

from src.layered_config.document import Document
from src.layered_config.exceptions import (
    ConfigNotLoadedError,
    ConfigValidationError,
)
from src.layered_config.readers.local import read_application_config
from src.layered_config.remote.reader import RemoteConfigReader
from src.layered_config.settings import DEFAULT_PRECEDENCE, ConfigSource, LoaderSettings, load_settings
from src.layered_config.utils.config.env import read_application_json
from src.layered_config.utils.config.merger import ConfigMerger
from src.layered_config.utils.config.yaml_loader import YAMLLoader
from src.layered_config.utils.logging.context import load_context
from src.layered_config.utils.logging.factory import set_package_log_level


logger = logging.getLogger(__name__)


def _validate_precedence(precedence: Iterable[ConfigSource]) -> Tuple[ConfigSource, ...]:
    resolved = []
    for entry in precedence:
        try:
            source = ConfigSource(entry)
        except ValueError:
            raise ConfigValidationError(
                message="Invalid config precedence",
                field_errors={"precedence": f"unknown source: {entry!r}"},
            )
        if source in resolved:
            raise ConfigValidationError(
                message="Invalid config precedence",
                field_errors={"precedence": f"duplicate source: {source.value}"},
            )
        resolved.append(source)
    return tuple(resolved)


class ConfigLoader:
    """Builds the merged configuration and keeps the last successful result.

    Each ``load()`` recomputes everything from scratch and replaces the
    stored configuration wholesale. Concurrent loads are not serialized;
    the last one to finish wins.

    Sources, merged in ``precedence`` order (lowest first):
    - LOCAL: application file plus profile files
    - ENVIRONMENT_JSON: the ``APPLICATION_JSON`` blob
    - REMOTE: resolved remote client options and fetched remote config

    The local application file is always read, since the remote reader
    needs it for the application name; leaving LOCAL out of the precedence
    only keeps it out of the result.

    Args:
        settings: Fixed loader settings (None = read the environment on each load)
        remote_reader: Remote config reader
        precedence: Sources to merge, lowest precedence first
        environ: Environment for the JSON blob and remote tables (None = ``os.environ``)
        yaml_loader: YAML loader for local files
        merger: Document merger
    """

    def __init__(
        self,
        settings: Optional[LoaderSettings] = None,
        remote_reader: Optional[RemoteConfigReader] = None,
        precedence: Iterable[ConfigSource] = DEFAULT_PRECEDENCE,
        environ: Optional[Mapping[str, str]] = None,
        yaml_loader: Optional[YAMLLoader] = None,
        merger: Optional[ConfigMerger] = None,
    ):
        self.settings = settings
        self.precedence = _validate_precedence(precedence)
        self.environ = environ
        self.merger = merger or ConfigMerger()
        self.yaml_loader = yaml_loader or YAMLLoader(self.merger)
        self.remote_reader = remote_reader or RemoteConfigReader(
            yaml_loader=self.yaml_loader,
            merger=self.merger,
            environ=environ,
        )
        self._config: Optional[Document] = None

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    def _resolve_settings(self) -> LoaderSettings:
        if self.settings is not None:
            return self.settings

        return load_settings()

    async def load(self) -> Document:
        """Load and merge every configured source.

        Returns:
            The merged configuration (a copy; the loader keeps its own)

        Raises:
            LayeredConfigError: Any fatal error from a source; the
                previously stored configuration is left untouched
        """
        settings = self._resolve_settings()
        if settings.log_level:
            try:
                set_package_log_level(settings.log_level)
            except ValueError as e:
                raise ConfigValidationError(
                    message="Invalid loader settings",
                    field_errors={"log_level": str(e)},
                )

        with load_context() as load_id:
            logger.info(
                "Loading configuration",
                extra={
                    "config_path": settings.config_path,
                    "profiles": settings.active_profiles,
                    "precedence": [source.value for source in self.precedence],
                },
            )

            sources: Dict[ConfigSource, Document] = {}
            sources[ConfigSource.LOCAL] = read_application_config(
                settings.config_path,
                settings.active_profiles,
                yaml_loader=self.yaml_loader,
            )

            if ConfigSource.ENVIRONMENT_JSON in self.precedence:
                sources[ConfigSource.ENVIRONMENT_JSON] = read_application_json(self.environ)

            if ConfigSource.REMOTE in self.precedence:
                application_config = self.merger.merge(
                    sources[ConfigSource.LOCAL],
                    sources.get(ConfigSource.ENVIRONMENT_JSON, {}),
                )
                sources[ConfigSource.REMOTE] = await self.remote_reader.invoke(
                    settings.active_profiles,
                    application_config,
                    settings.remote_config_path,
                )

            merged = self.merger.merge_multiple(*(sources[source] for source in self.precedence))
            self._config = merged

            logger.info(
                "Configuration loaded",
                extra={"load_id": load_id, "keys": list(merged.keys())},
            )

        return copy.deepcopy(merged)

    def instance(self) -> Document:
        """Return the last successfully loaded configuration.

        Raises:
            ConfigNotLoadedError: If ``load()`` has not succeeded yet
        """
        if self._config is None:
            raise ConfigNotLoadedError()
        return copy.deepcopy(self._config)


_default_loader: Optional[ConfigLoader] = None


def get_default_loader() -> ConfigLoader:
    """Get the process-wide loader, creating it on first use.

    The default loader reads its settings from the environment. Use a
    dedicated ``ConfigLoader`` when more than one configuration is needed.
    """
    global _default_loader
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


async def load() -> Document:
    """Load configuration with the default loader."""
    return await get_default_loader().load()


def instance() -> Document:
    """Last configuration loaded by the default loader."""
    return get_default_loader().instance()
