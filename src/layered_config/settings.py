"""Loader options read from the environment."""
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from src.layered_config.exceptions import ConfigNotFoundError, ConfigValidationError


class ConfigSource(str, Enum):
    """Sources the loader can merge, used to build a precedence list."""

    LOCAL = "local"
    ENVIRONMENT_JSON = "environment_json"
    REMOTE = "remote"


DEFAULT_PRECEDENCE = (
    ConfigSource.LOCAL,
    ConfigSource.ENVIRONMENT_JSON,
    ConfigSource.REMOTE,
)


class LoaderSettings(BaseSettings):
    """Where to find configuration and which profiles are active.

    Settings are loaded from environment variables:
    CONFIG_PATH, CONFIG_BOOTSTRAP_PATH, ACTIVE_PROFILES, LOG_LEVEL.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
    )

    config_path: str = Field(
        validation_alias=AliasChoices("config_path", "CONFIG_PATH"),
        description="Directory holding application config files",
    )
    bootstrap_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("bootstrap_path", "CONFIG_BOOTSTRAP_PATH"),
        description="Directory holding the remote bootstrap file (defaults to config_path)",
    )
    active_profiles: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        validation_alias=AliasChoices("active_profiles", "ACTIVE_PROFILES"),
        description="Active profiles, comma-separated in the environment",
    )
    log_level: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("log_level", "LOG_LEVEL"),
        description="Level for this package's loggers",
    )

    @field_validator("active_profiles", mode="before")
    @classmethod
    def split_profiles(cls, v: Any) -> Any:
        """Split comma-separated profiles, dropping blanks and repeats."""
        if v is None:
            return []
        if isinstance(v, str):
            tokens = v.split(",")
        elif isinstance(v, (list, tuple)):
            tokens = [str(token) for token in v]
        else:
            return v

        profiles: List[str] = []
        for token in tokens:
            token = token.strip()
            if token and token not in profiles:
                profiles.append(token)
        return profiles

    @field_validator("bootstrap_path", "log_level", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def remote_config_path(self) -> str:
        """Directory searched for ``bootstrap.<ext>``."""
        return self.bootstrap_path or self.config_path


def load_settings(**overrides: Any) -> LoaderSettings:
    """Read loader settings from the environment, with explicit overrides.

    Raises:
        ConfigNotFoundError: If no config path is set
        ConfigValidationError: If a setting is invalid
    """
    try:
        return LoaderSettings(**overrides)
    except ValidationError as e:
        if any(err["type"] == "missing" for err in e.errors()):
            raise ConfigNotFoundError(message="No configuration path given (set CONFIG_PATH)")
        raise ConfigValidationError(
            message="Invalid loader settings",
            field_errors={
                ".".join(str(part) for part in err["loc"]): err["msg"]
                for err in e.errors()
            },
            original_error=e,
        )
